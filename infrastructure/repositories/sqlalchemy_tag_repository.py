"""SQLAlchemy implementation of the tag repository.

This module contains the concrete implementation of TagRepositoryInterface
using SQLAlchemy for database operations and entity mapping.
"""

from typing import List, Optional

from domain.entities.tag import TagEntity
from domain.repositories.tag_repository import TagRepositoryInterface
from sqlalchemy.orm import Session

from infrastructure.models import associations  # noqa: F401
from infrastructure.models.post_orm import PostORM
from infrastructure.models.tag_orm import TagORM


class SqlAlchemyTagRepository(TagRepositoryInterface):
    """SQLAlchemy implementation of the tag repository.

    NOTE: This repository does not store the session internally.
    Each method receives a fresh session to ensure proper transaction management
    and avoid session leaks. Writes are flushed, committing is up to the caller.

    Example:
        >>> repository = SqlAlchemyTagRepository()
        >>> with get_db_session() as db:
        ...     tag = await repository.get_by_slug(db, "bug")
    """

    async def get_all(self, db_session: Session) -> List[TagEntity]:
        tag_models = db_session.query(TagORM).all()
        return [self._model_to_entity(model) for model in tag_models]

    async def get_by_slug(self, db_session: Session, slug: str) -> Optional[TagEntity]:
        """Retrieve a tag by its slug (exact match).

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.
            slug (str): The slug of the tag to retrieve.

        Returns:
            Optional[TagEntity]: The tag entity if found, None otherwise.
        """
        tag_model = db_session.query(TagORM).filter(TagORM.slug == slug).first()
        return self._model_to_entity(tag_model) if tag_model else None

    async def save(self, db_session: Session, tag: TagEntity) -> TagEntity:
        """Save a tag entity to the database.

        For new tags (id is None), this will create a new record.
        For existing tags, this will update the existing record.

        Args:
            db_session (Session): Fresh SQLAlchemy database session for this operation.
            tag (TagEntity): The tag entity to save.

        Returns:
            TagEntity: The saved tag entity with populated ID.
        """
        tag_model = None
        if not tag.is_new():
            tag_model = db_session.query(TagORM).filter(TagORM.id == tag.id).first()

        if tag_model is None:
            tag_model = self._entity_to_model(tag)
            db_session.add(tag_model)
        else:
            tag_model.name = tag.name
            tag_model.slug = tag.slug
            tag_model.color = tag.color
            tag_model.is_public = tag.is_public

        db_session.flush()  # Flush to get the generated ID
        return self._model_to_entity(tag_model)

    async def delete(self, db_session: Session, tag_id: int) -> bool:
        tag_model = db_session.query(TagORM).filter(TagORM.id == tag_id).first()
        if tag_model:
            # Post assignments are removed through the secondary relationship
            db_session.delete(tag_model)
            db_session.flush()
            return True
        return False

    async def assign(self, db_session: Session, tag_id: int, post_id: int) -> None:
        tag_model = db_session.query(TagORM).filter(TagORM.id == tag_id).one()
        post_model = db_session.query(PostORM).filter(PostORM.id == post_id).one()
        if tag_model not in post_model.tags:
            post_model.tags.append(tag_model)
            db_session.flush()

    async def unassign(self, db_session: Session, tag_id: int, post_id: int) -> None:
        post_model = db_session.query(PostORM).filter(PostORM.id == post_id).first()
        if post_model is None:
            return
        for tag_model in list(post_model.tags):
            if tag_model.id == tag_id:
                post_model.tags.remove(tag_model)
        db_session.flush()

    def _model_to_entity(self, tag_model: TagORM) -> TagEntity:
        """Convert SQLAlchemy model to domain entity.

        Args:
            tag_model (TagORM): SQLAlchemy tag model instance.

        Returns:
            TagEntity: Corresponding domain entity.
        """
        return TagEntity(
            id=tag_model.id,
            name=tag_model.name,
            slug=tag_model.slug,
            color=tag_model.color,
            is_public=bool(tag_model.is_public),
        )

    def _entity_to_model(self, tag_entity: TagEntity) -> TagORM:
        return TagORM(
            id=tag_entity.id,
            name=tag_entity.name,
            slug=tag_entity.slug,
            color=tag_entity.color,
            is_public=tag_entity.is_public,
        )
