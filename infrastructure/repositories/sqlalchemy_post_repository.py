"""SQLAlchemy implementation of the post repository."""

from typing import Optional

from domain.entities.post import PostEntity
from domain.repositories.post_repository import PostRepositoryInterface
from sqlalchemy.orm import Session

from infrastructure.models import associations  # noqa: F401
from infrastructure.models.post_orm import PostORM
from infrastructure.models.tag_orm import TagORM  # noqa: F401


class SqlAlchemyPostRepository(PostRepositoryInterface):
    """SQLAlchemy implementation of the post repository.

    Example:
        >>> repository = SqlAlchemyPostRepository()
        >>> with get_db_session() as db:
        ...     post = await repository.get_by_number(db, 12)
    """

    async def get_by_number(
        self, db_session: Session, number: int
    ) -> Optional[PostEntity]:
        post_model = db_session.query(PostORM).filter(PostORM.number == number).first()
        return self._model_to_entity(post_model) if post_model else None

    def _model_to_entity(self, post_model: PostORM) -> PostEntity:
        return PostEntity(
            id=post_model.id, number=post_model.number, title=post_model.title
        )
