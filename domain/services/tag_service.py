"""Tag domain service.

This module contains the TagService that performs tag mutations once an
action has authorized and validated the request. It trusts the entities
resolved by the action and does not validate again.
"""

import logging
from typing import List, Optional

from domain.entities.post import PostEntity
from domain.entities.tag import TagEntity
from domain.entities.user import UserEntity
from domain.repositories.tag_repository import TagRepositoryInterface
from sqlalchemy.orm import Session
from utils.slug import make_slug

logger = logging.getLogger(__name__)


class TagService:
    """Domain service for tag business operations.

    Attributes:
        _tag_repository (TagRepositoryInterface): Repository for tag data access.

    Example:
        >>> service = TagService(tag_repository)
        >>> with get_db_session() as db:
        ...     tag = await service.create_tag(db, "Bug", "FF0000", is_public=True)
        ...     print(tag.slug)
        "bug"
    """

    def __init__(self, tag_repository: TagRepositoryInterface) -> None:
        """Initialize the tag service with required dependencies.

        Args:
            tag_repository (TagRepositoryInterface): Repository implementation for tag data access.
        """
        self._tag_repository = tag_repository

    async def get_all_tags(
        self, db_session: Session, user: Optional[UserEntity] = None
    ) -> List[TagEntity]:
        """Retrieve the tags visible to a caller.

        Args:
            db_session (Session): Fresh database session for this operation.
            user (Optional[UserEntity]): The caller, None when anonymous.

        Returns:
            List[TagEntity]: Visible tags sorted by name.
        """
        tags = await self._tag_repository.get_all(db_session)

        # Business rule: private tags are only listed for collaborators
        if user is None or not user.is_collaborator():
            tags = [tag for tag in tags if tag.is_public]

        return sorted(tags, key=lambda tag: tag.name.lower())

    async def create_tag(
        self, db_session: Session, name: str, color: str, is_public: bool = False
    ) -> TagEntity:
        """Create a new tag.

        Args:
            db_session (Session): Fresh database session for this operation.
            name (str): Display name of the tag.
            color (str): Six hexadecimal digits.
            is_public (bool): Whether visitors can see the tag.

        Returns:
            TagEntity: The created tag entity with assigned ID.
        """
        new_tag = TagEntity(
            id=None, name=name, slug=make_slug(name), color=color, is_public=is_public
        )
        created = await self._tag_repository.save(db_session, new_tag)
        db_session.commit()

        logger.info(f"Created tag {created.id} ({created.slug})")
        return created

    async def update_tag(
        self,
        db_session: Session,
        tag: TagEntity,
        name: str,
        color: str,
        is_public: bool = False,
    ) -> TagEntity:
        """Update an existing tag; the slug follows the new name.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag (TagEntity): The tag being edited.
            name (str): New display name.
            color (str): New color.
            is_public (bool): New visibility.

        Returns:
            TagEntity: The updated tag entity.
        """
        updated_tag = TagEntity(
            id=tag.id,
            name=name,
            slug=make_slug(name),
            color=color,
            is_public=is_public,
        )
        updated = await self._tag_repository.save(db_session, updated_tag)
        db_session.commit()

        logger.info(f"Updated tag {updated.id} ({tag.slug} -> {updated.slug})")
        return updated

    async def delete_tag(self, db_session: Session, tag: TagEntity) -> bool:
        """Delete a tag together with its post assignments.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag (TagEntity): The tag to delete.

        Returns:
            bool: True if the tag was deleted, False if it was already gone.
        """
        deleted = await self._tag_repository.delete(db_session, tag.id)
        db_session.commit()

        logger.info(f"Deleted tag {tag.id} ({tag.slug})")
        return deleted

    async def assign_tag(
        self, db_session: Session, tag: TagEntity, post: PostEntity
    ) -> None:
        await self._tag_repository.assign(db_session, tag.id, post.id)
        db_session.commit()
        logger.info(f"Assigned tag {tag.slug} to post #{post.number}")

    async def unassign_tag(
        self, db_session: Session, tag: TagEntity, post: PostEntity
    ) -> None:
        await self._tag_repository.unassign(db_session, tag.id, post.id)
        db_session.commit()
        logger.info(f"Unassigned tag {tag.slug} from post #{post.number}")
