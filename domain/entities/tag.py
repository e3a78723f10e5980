"""Tag domain entity.

This module contains the Tag domain entity that represents
a tag in the business domain with its rules and behaviors.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TagEntity:
    """Domain entity representing a tag used to categorize posts.

    This is an immutable domain object. Tags are addressed by their slug
    in URLs and by their numeric ID in storage.

    Attributes:
        id (Optional[int]): Unique identifier for the tag. None for new tags.
        name (str): The display name of the tag, at most 30 characters.
        slug (str): URL-safe identifier derived from the name, unique across tags.
        color (str): Six hexadecimal digits, without a leading ``#``.
        is_public (bool): Whether visitors can see the tag.

    Example:
        >>> tag = TagEntity(id=None, name="Bug", slug="bug", color="FF00AA")
        >>> print(tag.is_new())
        True

    Business Rules:
        - Tag name must be non-empty and stripped of whitespace
        - No two tags share a slug (enforced by validation and storage)
    """

    id: Optional[int]
    name: str
    slug: str
    color: str
    is_public: bool = False

    def __post_init__(self) -> None:
        """Validate tag entity after initialization.

        Raises:
            ValueError: If tag name is empty or contains only whitespace.
        """
        if not self.name or not self.name.strip():
            raise ValueError("Tag name cannot be empty or whitespace")

        object.__setattr__(self, "name", self.name.strip())

    def is_new(self) -> bool:
        """Check if this is a new tag (not yet persisted).

        Returns:
            bool: True if the tag has no ID (new), False otherwise.
        """
        return self.id is None
