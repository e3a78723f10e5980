"""Post domain entity.

Posts are the feedback items users submit. Tag actions only reference
them, so the entity carries just what those actions need.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PostEntity:
    """Domain entity representing a feedback post.

    Attributes:
        id (int): Storage identifier of the post.
        number (int): Sequential, user-facing post number.
        title (str): Title of the post.
    """

    id: int
    number: int
    title: str
