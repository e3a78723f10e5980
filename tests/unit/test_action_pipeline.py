"""Tests for the bind -> authorize -> validate pipeline."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from application.actions.base import ActionState
from application.actions.pipeline import (
    ActionForbiddenError,
    ActionInvalidError,
    ActionStateError,
    bind,
    run_action,
)
from application.actions.tag_actions import AssignUnassignTag, CreateEditTag, DeleteTag
from domain.queries.base import EntityNotFoundError


def test_bind_populates_only_supplied_fields(dispatcher):
    action = CreateEditTag(dispatcher)

    model = bind(action, {"name": "Bug", "color": "ff00aa", "unknown": "ignored"})

    assert action.model is model
    assert (model.slug, model.name, model.color) == ("", "Bug", "ff00aa")
    assert action.state is ActionState.BOUND


def test_bind_strips_surrounding_whitespace_from_strings(dispatcher):
    model = bind(CreateEditTag(dispatcher), {"name": "  Bug\n", "color": " ff00aa "})

    assert (model.name, model.color) == ("Bug", "ff00aa")


def test_bind_rejects_undecodable_payload(dispatcher):
    with pytest.raises(ValidationError):
        bind(AssignUnassignTag(dispatcher), {"number": "twelve", "slug": "bug"})


@pytest.mark.asyncio
async def test_successful_run_returns_validated_action(admin, dispatcher):
    action = await run_action(
        CreateEditTag(dispatcher), {"name": "Bug", "color": "ff00aa"}, admin
    )

    assert action.state is ActionState.VALIDATED
    assert action.model.name == "Bug"
    assert action.tag is None


@pytest.mark.asyncio
async def test_unauthorized_caller_stops_before_validation(collaborator, dispatcher):
    action = CreateEditTag(dispatcher)

    with pytest.raises(ActionForbiddenError):
        await run_action(action, {"name": "Bug", "color": "ff00aa"}, collaborator)

    assert action.state is ActionState.FORBIDDEN
    assert dispatcher.dispatched == []


@pytest.mark.asyncio
async def test_anonymous_caller_is_forbidden(dispatcher):
    with pytest.raises(ActionForbiddenError):
        await run_action(DeleteTag(dispatcher), {"slug": "bug"}, None)


@pytest.mark.asyncio
async def test_field_failures_raise_invalid_error(admin, dispatcher):
    action = CreateEditTag(dispatcher)

    with pytest.raises(ActionInvalidError) as exc_info:
        await run_action(action, {"name": "Feature", "color": "zzzzzz"}, admin)

    assert exc_info.value.result.failures == {"color": ["Color is invalid."]}
    assert action.state is ActionState.FAILED


@pytest.mark.asyncio
async def test_not_found_propagates_unwrapped(admin, dispatcher):
    action = DeleteTag(dispatcher)

    with pytest.raises(EntityNotFoundError):
        await run_action(action, {"slug": "ghost"}, admin)

    assert action.state is ActionState.FAILED


@pytest.mark.asyncio
async def test_action_runs_at_most_once(admin, dispatcher, tag_repository):
    tag_repository.add("Bug")
    action = await run_action(DeleteTag(dispatcher), {"slug": "bug"}, admin)

    with pytest.raises(ActionStateError):
        await run_action(action, {"slug": "bug"}, admin)
