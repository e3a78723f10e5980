"""Tag output schemas for API responses.

This module contains Pydantic models for tag-related API responses.
"""

from pydantic import BaseModel


class TagResponse(BaseModel):
    """Schema for tag data in API responses.

    Attributes:
        id (int): Identifier of the tag.
        name (str): The name of the tag.
        slug (str): URL-safe identifier of the tag.
        color (str): Six hexadecimal digits.
        is_public (bool): Whether visitors can see the tag.

    Example:
        >>> tag_response = TagResponse(id=1, name="Bug", slug="bug", color="FF0000", is_public=True)
    """

    id: int
    name: str
    slug: str
    color: str
    is_public: bool
