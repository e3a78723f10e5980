"""SQLAlchemy ORM model for Tag entity.

This module contains the TagORM class that defines the database schema
for tags and handles tag data persistence.

Architecture:
    This ORM model is part of the Infrastructure layer and should only be used by:
    - SqlAlchemyTagRepository implementation
    - Database migration scripts
    - Other infrastructure-specific code

    Domain code should use TagEntity instead of this ORM model.
"""

from datetime import datetime

from infrastructure.models.base import Base
from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship


class TagORM(Base):
    """SQLAlchemy ORM model for tags that categorize posts.

    Attributes:
        id (int): Primary key, auto-incremented.
        name (str): Tag name, max 30 characters.
        slug (str): URL-safe identifier, unique across all tags.
        color (str): Six hexadecimal digits.
        is_public (bool): Whether visitors can see the tag.
        created_at (datetime): Timestamp when tag was created.
        posts (List[PostORM]): Many-to-many relationship with posts.

    Table Schema:
        - Table name: 'tags'
        - Primary key: id (Integer)
        - Unique constraint: slug

    Example:
        >>> tag_orm = TagORM(name="Bug", slug="bug", color="FF0000")
        >>> db.add(tag_orm)
        >>> db.commit()
    """

    __tablename__ = "tags"

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        index=True,
        comment="Primary key, auto-incremented",
    )

    name = Column(String(30), nullable=False, comment="Tag display name")

    slug = Column(
        String,
        unique=True,
        nullable=False,
        comment="Tag slug, must be unique across all tags",
    )

    color = Column(String(6), nullable=False, comment="Tag color as 6 hex digits")

    is_public = Column(
        Boolean, default=False, nullable=False, comment="Visible to visitors"
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        comment="Timestamp when tag was created",
    )

    # Import is deferred to avoid circular import issues
    posts = relationship(
        "PostORM", secondary="post_tags", back_populates="tags", lazy="select"
    )

    def __repr__(self) -> str:
        return f"<TagORM(id={self.id}, slug='{self.slug}')>"

    def __str__(self) -> str:
        return self.name
