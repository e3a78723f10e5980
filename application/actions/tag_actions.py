"""Tag management actions.

Classes:
    CreateEditTag: Create a new tag or edit an existing one.
    DeleteTag: Delete an existing tag.
    AssignUnassignTag: Add a tag to, or remove it from, a post.
"""

import re
from typing import Optional

from domain.entities.post import PostEntity
from domain.entities.tag import TagEntity
from domain.entities.user import UserEntity
from domain.queries.base import EntityNotFoundError
from domain.queries.post_queries import GetPostByNumber
from domain.queries.tag_queries import GetTagBySlug
from domain.services.dispatcher import QueryDispatcherInterface
from utils.slug import make_slug

from application.actions.base import Action
from application.actions.validation import ValidationResult
from application.rest.schemas.input.tag_input import (
    AssignUnassignTagInput,
    CreateEditTagInput,
    DeleteTagInput,
)

TAG_NAME_MAX_LENGTH = 30
TAG_COLOR_LENGTH = 6

_COLOR_PATTERN = re.compile(r"^[A-Fa-f0-9]{6}$")


class CreateEditTag(Action[CreateEditTagInput]):
    """Create a new tag, or edit the tag named by ``model.slug``.

    Attributes:
        tag (Optional[TagEntity]): The tag being edited; None when creating.
    """

    def __init__(self, dispatcher: QueryDispatcherInterface) -> None:
        super().__init__(dispatcher)
        self.tag: Optional[TagEntity] = None

    def bind_target(self) -> CreateEditTagInput:
        self.model = CreateEditTagInput()
        return self.model

    def is_authorized(self, user: Optional[UserEntity]) -> bool:
        return user is not None and user.is_administrator()

    async def validate(self, user: Optional[UserEntity]) -> ValidationResult:
        result = ValidationResult.success()

        if self.model.slug:
            self.tag = await self._dispatcher.dispatch(GetTagBySlug(self.model.slug))

        name = self.model.name.strip()
        if not name:
            result.add_field_failure("name", "Name is required.")
        elif len(name) > TAG_NAME_MAX_LENGTH:
            result.add_field_failure(
                "name", f"Name must have less than {TAG_NAME_MAX_LENGTH} characters."
            )
        elif await self._is_name_taken(name):
            result.add_field_failure("name", "This tag name is already in use.")

        color = self.model.color
        if not color:
            result.add_field_failure("color", "Color is required.")
        elif len(color) != TAG_COLOR_LENGTH:
            result.add_field_failure(
                "color", f"Color must be exactly {TAG_COLOR_LENGTH} characters."
            )
        elif not _COLOR_PATTERN.match(color):
            result.add_field_failure("color", "Color is invalid.")

        return result

    async def _is_name_taken(self, name: str) -> bool:
        try:
            duplicate = await self._dispatcher.dispatch(GetTagBySlug(make_slug(name)))
        except EntityNotFoundError:
            return False
        return self.tag is None or self.tag.id != duplicate.id


class DeleteTag(Action[DeleteTagInput]):
    """Delete an existing tag. The tag must exist."""

    def __init__(self, dispatcher: QueryDispatcherInterface) -> None:
        super().__init__(dispatcher)
        self.tag: Optional[TagEntity] = None

    def bind_target(self) -> DeleteTagInput:
        self.model = DeleteTagInput()
        return self.model

    def is_authorized(self, user: Optional[UserEntity]) -> bool:
        return user is not None and user.is_administrator()

    async def validate(self, user: Optional[UserEntity]) -> ValidationResult:
        self.tag = await self._dispatcher.dispatch(GetTagBySlug(self.model.slug))
        return ValidationResult.success()


class AssignUnassignTag(Action[AssignUnassignTagInput]):
    """Add a tag to, or remove it from, a post.

    Both lookups go out in one dispatch; ``post`` and ``tag`` are only set
    when both succeed.
    """

    def __init__(self, dispatcher: QueryDispatcherInterface) -> None:
        super().__init__(dispatcher)
        self.tag: Optional[TagEntity] = None
        self.post: Optional[PostEntity] = None

    def bind_target(self) -> AssignUnassignTagInput:
        self.model = AssignUnassignTagInput()
        return self.model

    def is_authorized(self, user: Optional[UserEntity]) -> bool:
        return user is not None and user.is_collaborator()

    async def validate(self, user: Optional[UserEntity]) -> ValidationResult:
        post, tag = await self._dispatcher.dispatch_all(
            GetPostByNumber(self.model.number), GetTagBySlug(self.model.slug)
        )
        self.post = post
        self.tag = tag
        return ValidationResult.success()
