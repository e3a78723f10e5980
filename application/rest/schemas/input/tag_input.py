"""Tag input schemas for API requests.

This module contains Pydantic models bound from tag-related requests.
Every field has a default so that an empty instance can serve as the
bind target of an action; the actions themselves validate the values.
"""

from pydantic import BaseModel, Field


class CreateEditTagInput(BaseModel):
    """Input for creating a tag, or editing one when ``slug`` is set.

    Attributes:
        slug (str): Slug of the tag being edited, empty when creating.
        name (str): Display name of the tag.
        color (str): Six hexadecimal digits.
        is_public (bool): Whether visitors can see the tag.

    Example:
        >>> tag_data = CreateEditTagInput(name="Bug", color="FF0000")
        >>> print(tag_data.slug == "")
        True
    """

    slug: str = Field(default="", description="Slug of the tag being edited")
    name: str = Field(default="", description="Tag name")
    color: str = Field(default="", description="Tag color as 6 hex digits")
    is_public: bool = Field(default=False, description="Visible to visitors")


class DeleteTagInput(BaseModel):
    """Input for deleting a tag.

    Attributes:
        slug (str): Slug of the tag to delete.
    """

    slug: str = Field(default="", description="Slug of the tag to delete")


class AssignUnassignTagInput(BaseModel):
    """Input for assigning a tag to, or removing it from, a post.

    Attributes:
        number (int): Number of the post.
        slug (str): Slug of the tag.
    """

    number: int = Field(default=0, description="Post number")
    slug: str = Field(default="", description="Tag slug")
