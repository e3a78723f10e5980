"""Tag repository interface.

This module defines the abstract interface for tag data access
operations, following the Repository pattern from DDD.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.orm import Session

from ..entities.tag import TagEntity


class TagRepositoryInterface(ABC):
    """Abstract interface for tag repository operations.

    This interface defines the contract for tag data access
    without coupling to specific database implementations.

    NOTE: All methods receive a fresh database session to ensure
    proper transaction management and avoid session leaks.
    """

    @abstractmethod
    async def get_all(self, db_session: Session) -> List[TagEntity]:
        """Retrieve all tags from the repository.

        Args:
            db_session (Session): Fresh database session for this operation.

        Returns:
            List[TagEntity]: List of all tag entities.
        """
        pass

    @abstractmethod
    async def get_by_slug(self, db_session: Session, slug: str) -> Optional[TagEntity]:
        """Retrieve a tag by its slug.

        Args:
            db_session (Session): Fresh database session for this operation.
            slug (str): The slug of the tag to retrieve.

        Returns:
            Optional[TagEntity]: The tag entity if found, None otherwise.

        Example:
            >>> with get_db_session() as db:
            ...     tag = await repository.get_by_slug(db, "feature-request")
            ...     print(tag.name if tag else "Not found")
            "Feature Request"
        """
        pass

    @abstractmethod
    async def save(self, db_session: Session, tag: TagEntity) -> TagEntity:
        """Save a tag entity to the repository.

        For new tags (id is None), this will create a new record.
        For existing tags, this will update the existing record.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag (TagEntity): The tag entity to save.

        Returns:
            TagEntity: The saved tag entity with populated ID.
        """
        pass

    @abstractmethod
    async def delete(self, db_session: Session, tag_id: int) -> bool:
        """Delete a tag and every post assignment it has.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_id (int): The unique identifier of the tag to delete.

        Returns:
            bool: True if the tag was deleted, False if not found.
        """
        pass

    @abstractmethod
    async def assign(self, db_session: Session, tag_id: int, post_id: int) -> None:
        """Attach a tag to a post. Assigning twice is a no-op.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_id (int): Identifier of the tag.
            post_id (int): Identifier of the post.
        """
        pass

    @abstractmethod
    async def unassign(self, db_session: Session, tag_id: int, post_id: int) -> None:
        """Detach a tag from a post. Unassigning a missing pair is a no-op.

        Args:
            db_session (Session): Fresh database session for this operation.
            tag_id (int): Identifier of the tag.
            post_id (int): Identifier of the post.
        """
        pass
