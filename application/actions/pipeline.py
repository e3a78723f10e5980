"""Action pipeline: bind -> authorize -> validate.

The pipeline drives a single action instance through its lifecycle and
turns each non-success outcome into an exception the REST layer can map
to a response. Dispatcher errors raised by ``validate`` pass through
unchanged.
"""

import logging
from typing import Any, Mapping, Optional, TypeVar

from domain.entities.user import UserEntity
from pydantic import BaseModel

from application.actions.base import Action, ActionState
from application.actions.validation import ValidationResult

logger = logging.getLogger(__name__)

TAction = TypeVar("TAction", bound=Action)


class ActionError(Exception):
    """Base exception for actions that did not pass the pipeline."""

    pass


class ActionForbiddenError(ActionError):
    """Exception raised when the caller may not run the action."""

    pass


class ActionInvalidError(ActionError):
    """Exception raised when validation produced field failures.

    Attributes:
        result (ValidationResult): The failures to report to the caller.
    """

    def __init__(self, result: ValidationResult) -> None:
        super().__init__("Request has invalid fields")
        self.result = result


class ActionStateError(ActionError):
    """Exception raised when an action instance is run more than once."""

    pass


def bind(action: Action, payload: Mapping[str, Any]) -> BaseModel:
    """Populate the action's bind target from request data.

    Supplied string fields are stripped of surrounding whitespace.

    Args:
        action (Action): Action in the UNBOUND state.
        payload (Mapping[str, Any]): Decoded request data.

    Returns:
        BaseModel: The bound input model, also available as ``action.model``.

    Raises:
        pydantic.ValidationError: If the payload cannot be decoded into the model.
    """
    target = action.bind_target()
    decoded = type(target).model_validate(dict(payload))
    for field_name in decoded.model_fields_set:
        value = getattr(decoded, field_name)
        if isinstance(value, str):
            value = value.strip()
        setattr(target, field_name, value)

    action.state = ActionState.BOUND
    return target


async def run_action(
    action: TAction, payload: Mapping[str, Any], user: Optional[UserEntity]
) -> TAction:
    """Bind, authorize and validate an action.

    Args:
        action (TAction): A fresh action instance.
        payload (Mapping[str, Any]): Decoded request data.
        user (Optional[UserEntity]): The caller, None when anonymous.

    Returns:
        TAction: The same action, validated and holding its resolved entities.

    Raises:
        ActionStateError: If the action has already been run.
        ActionForbiddenError: If the caller is not authorized.
        ActionInvalidError: If validation produced field failures.
        DispatchError: If a lookup failed; EntityNotFoundError for missing targets.

    Example:
        >>> action = await run_action(DeleteTag(dispatcher), {"slug": "bug"}, admin)
        >>> print(action.tag.name)
        "Bug"
    """
    if action.state is not ActionState.UNBOUND:
        raise ActionStateError(f"{action.name} has already been run")

    bind(action, payload)

    if not action.is_authorized(user):
        action.state = ActionState.FORBIDDEN
        logger.warning(
            f"User {user.id if user else 'anonymous'} is not allowed to run {action.name}"
        )
        raise ActionForbiddenError(f"Not allowed to run {action.name}")
    action.state = ActionState.AUTHORIZED

    try:
        result = await action.validate(user)
    except Exception:
        action.state = ActionState.FAILED
        raise

    if not result.ok:
        action.state = ActionState.FAILED
        logger.info(f"{action.name} rejected: {result.failures}")
        raise ActionInvalidError(result)

    action.state = ActionState.VALIDATED
    return action
