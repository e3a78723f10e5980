"""Action base class.

An action handles one kind of mutating request. Before anything is changed
the request goes through three steps, always in this order:

1. ``bind_target`` hands out an empty input model that is filled from the
   request.
2. ``is_authorized`` decides, without any I/O, whether the caller may run
   the action.
3. ``validate`` checks the business rules, resolving referenced entities
   through the query dispatcher and keeping them on the action so the
   execution step does not fetch them again.

Example:
    class DeleteTag(Action[DeleteTagInput]):
        def bind_target(self) -> DeleteTagInput:
            self.model = DeleteTagInput()
            return self.model

        def is_authorized(self, user):
            return user is not None and user.is_administrator()

        async def validate(self, user):
            self.tag = await self._dispatcher.dispatch(GetTagBySlug(self.model.slug))
            return ValidationResult.success()
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, Optional, TypeVar

from domain.entities.user import UserEntity
from domain.services.dispatcher import QueryDispatcherInterface
from pydantic import BaseModel

from application.actions.validation import ValidationResult

TModel = TypeVar("TModel", bound=BaseModel)


class ActionState(Enum):
    """Lifecycle of an action instance. Each instance is run at most once."""

    UNBOUND = "unbound"
    BOUND = "bound"
    FORBIDDEN = "forbidden"
    AUTHORIZED = "authorized"
    VALIDATED = "validated"
    FAILED = "failed"


class Action(ABC, Generic[TModel]):
    """Base class for bind-authorize-validate request handlers.

    Attributes:
        model (Optional[TModel]): The bound input, set by ``bind_target``.
        state (ActionState): Where the instance is in its lifecycle.
    """

    def __init__(self, dispatcher: QueryDispatcherInterface) -> None:
        self._dispatcher = dispatcher
        self.model: Optional[TModel] = None
        self.state = ActionState.UNBOUND

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def bind_target(self) -> TModel:
        """Return a fresh, empty input model and keep it as ``self.model``."""
        raise NotImplementedError

    @abstractmethod
    def is_authorized(self, user: Optional[UserEntity]) -> bool:
        """Decide whether ``user`` may run this action.

        Must not perform I/O. ``user`` is None for anonymous callers.
        """
        raise NotImplementedError

    @abstractmethod
    async def validate(self, user: Optional[UserEntity]) -> ValidationResult:
        """Check the bound input against the business rules.

        Business-rule violations are returned as field failures. Lookups that
        must succeed raise ``EntityNotFoundError``, and any other dispatcher
        error is raised unchanged.

        Args:
            user (Optional[UserEntity]): The caller.

        Returns:
            ValidationResult: Field failures, or success.
        """
        raise NotImplementedError
