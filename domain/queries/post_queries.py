"""Post queries."""

from dataclasses import dataclass

from domain.entities.post import PostEntity
from domain.queries.base import EntityNotFoundError, Query, QueryHandler
from domain.repositories.post_repository import PostRepositoryInterface
from sqlalchemy.orm import Session


@dataclass(frozen=True)
class GetPostByNumber(Query):
    """Resolve a post from its sequential number."""

    number: int


class GetPostByNumberHandler(QueryHandler[GetPostByNumber, PostEntity]):
    def __init__(self, post_repository: PostRepositoryInterface) -> None:
        self._post_repository = post_repository

    async def handle(self, db_session: Session, query: GetPostByNumber) -> PostEntity:
        post = await self._post_repository.get_by_number(db_session, query.number)
        if post is None:
            raise EntityNotFoundError(f"Post #{query.number} not found")
        return post
