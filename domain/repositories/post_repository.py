"""Post repository interface.

Read-only access to posts; tag actions reference posts but never change them.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.orm import Session

from ..entities.post import PostEntity


class PostRepositoryInterface(ABC):
    """Abstract interface for post lookups."""

    @abstractmethod
    async def get_by_number(
        self, db_session: Session, number: int
    ) -> Optional[PostEntity]:
        """Retrieve a post by its sequential number.

        Args:
            db_session (Session): Fresh database session for this operation.
            number (int): The post number.

        Returns:
            Optional[PostEntity]: The post entity if found, None otherwise.
        """
        pass
