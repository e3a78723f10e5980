"""Association tables for many-to-many relationships in SQLAlchemy ORM.

Tables:
    post_tags: Associates posts with tags (many-to-many relationship)

Architecture:
    These association tables are part of the Infrastructure layer and are used
    by SQLAlchemy to manage many-to-many relationships automatically.
"""

from infrastructure.models.base import Base
from sqlalchemy import Column, ForeignKey, Integer, Table

post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("posts.id"), primary_key=True),
    Column(
        "tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    ),
    comment="Association table for many-to-many relationship between posts and tags",
)
