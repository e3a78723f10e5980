"""Query dispatcher for the tags service.

This module contains the dispatcher that routes typed queries to their
registered handlers, decoupling actions from the storage layer.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Type

from domain.queries.base import (
    DispatchError,
    HandlerNotRegisteredError,
    Query,
    QueryHandler,
)
from domain.queries.post_queries import GetPostByNumber, GetPostByNumberHandler
from domain.queries.tag_queries import GetTagBySlug, GetTagBySlugHandler

if TYPE_CHECKING:
    from domain.repositories.post_repository import PostRepositoryInterface
    from domain.repositories.tag_repository import TagRepositoryInterface
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class QueryDispatcherInterface(ABC):
    """Abstract interface of the query bus consumed by actions."""

    @abstractmethod
    async def dispatch(self, query: Query) -> Any:
        """Route a single query to its handler.

        Args:
            query (Query): The query to answer.

        Returns:
            Any: The handler's result.

        Raises:
            EntityNotFoundError: If the query matches nothing.
            DispatchError: For any other failure.
        """
        pass

    async def dispatch_all(self, *queries: Query) -> List[Any]:
        """Dispatch several queries in order, stopping at the first failure.

        Args:
            *queries (Query): Queries to answer.

        Returns:
            List[Any]: One result per query, in the order given.

        Raises:
            DispatchError: The first error raised by any query.

        Example:
            >>> post, tag = await dispatcher.dispatch_all(
            ...     GetPostByNumber(number=12), GetTagBySlug(slug="bug")
            ... )
        """
        results = []
        for query in queries:
            results.append(await self.dispatch(query))
        return results


class Dispatcher(QueryDispatcherInterface):
    """In-process dispatcher bound to the database session of one request.

    Attributes:
        _db_session (Session): Session handed to every handler.
        _handlers (Dict[Type[Query], QueryHandler]): Handler registry.
    """

    def __init__(self, db_session: Optional["Session"]) -> None:
        self._db_session = db_session
        self._handlers: Dict[Type[Query], QueryHandler] = {}

    def register(self, query_type: Type[Query], handler: QueryHandler) -> None:
        """Register the handler answering ``query_type``.

        Registering a type again replaces the previous handler.
        """
        self._handlers[query_type] = handler

    async def dispatch(self, query: Query) -> Any:
        handler = self._handlers.get(type(query))
        if handler is None:
            raise HandlerNotRegisteredError(
                f"No handler registered for {type(query).__name__}"
            )

        try:
            return await handler.handle(self._db_session, query)
        except DispatchError:
            raise
        except Exception as e:
            logger.error(f"Handler for {type(query).__name__} failed: {str(e)}")
            raise DispatchError(
                f"Failed to dispatch {type(query).__name__}: {str(e)}"
            ) from e


def create_dispatcher(
    db_session: Optional["Session"],
    tag_repository: "TagRepositoryInterface",
    post_repository: "PostRepositoryInterface",
) -> Dispatcher:
    """Create a dispatcher with every tags-service query handler registered.

    Args:
        db_session (Optional[Session]): Session of the current request.
        tag_repository (TagRepositoryInterface): Tag data access.
        post_repository (PostRepositoryInterface): Post data access.

    Returns:
        Dispatcher: Ready-to-use dispatcher.
    """
    dispatcher = Dispatcher(db_session)
    dispatcher.register(GetTagBySlug, GetTagBySlugHandler(tag_repository))
    dispatcher.register(GetPostByNumber, GetPostByNumberHandler(post_repository))
    return dispatcher
