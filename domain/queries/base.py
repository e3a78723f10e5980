"""Query and query handler base classes.

Queries are read-only requests routed by the dispatcher to exactly one
handler. A query carries its parameters as fields; the handler returns the
result instead of writing it back into the query.

Example:
    @dataclass(frozen=True)
    class GetTagBySlug(Query):
        slug: str

    class GetTagBySlugHandler(QueryHandler[GetTagBySlug, TagEntity]):
        async def handle(self, db_session, query):
            ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

TQuery = TypeVar("TQuery", bound="Query")
TResult = TypeVar("TResult")


class DispatchError(Exception):
    """Base exception for failures while dispatching a query."""

    pass


class EntityNotFoundError(DispatchError):
    """Exception raised when a query matches no entity.

    Callers branch on this type, never on the message text.
    """

    pass


class HandlerNotRegisteredError(DispatchError):
    """Exception raised when no handler is registered for a query type."""

    pass


@dataclass(frozen=True)
class Query:
    """Base class for queries."""


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """Base class for query handlers."""

    @abstractmethod
    async def handle(self, db_session: Session, query: TQuery) -> TResult:
        """Answer the query.

        Args:
            db_session (Session): Database session of the current request.
            query (TQuery): The query to answer.

        Returns:
            TResult: The resolved value.

        Raises:
            EntityNotFoundError: If nothing matches the query.
        """
        raise NotImplementedError
