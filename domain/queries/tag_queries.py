"""Tag queries."""

from dataclasses import dataclass

from domain.entities.tag import TagEntity
from domain.queries.base import EntityNotFoundError, Query, QueryHandler
from domain.repositories.tag_repository import TagRepositoryInterface
from sqlalchemy.orm import Session


@dataclass(frozen=True)
class GetTagBySlug(Query):
    """Resolve a tag from its slug."""

    slug: str


class GetTagBySlugHandler(QueryHandler[GetTagBySlug, TagEntity]):
    def __init__(self, tag_repository: TagRepositoryInterface) -> None:
        self._tag_repository = tag_repository

    async def handle(self, db_session: Session, query: GetTagBySlug) -> TagEntity:
        tag = await self._tag_repository.get_by_slug(db_session, query.slug)
        if tag is None:
            raise EntityNotFoundError(f"Tag with slug '{query.slug}' not found")
        return tag
