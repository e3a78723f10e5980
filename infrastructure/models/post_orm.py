"""SQLAlchemy ORM model for Post entity.

Architecture:
    This ORM model is part of the Infrastructure layer. Domain code should use
    PostEntity instead of this ORM model.
"""

from datetime import datetime

from infrastructure.models.base import Base
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship


class PostORM(Base):
    """SQLAlchemy ORM model for feedback posts.

    Attributes:
        id (int): Primary key, auto-incremented.
        number (int): Sequential, user-facing number, unique.
        title (str): Post title, max 100 characters.
        created_at (datetime): Timestamp when post was created.
        tags (List[TagORM]): Many-to-many relationship with tags.
    """

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    number = Column(
        Integer, unique=True, nullable=False, comment="Sequential post number"
    )

    title = Column(String(100), nullable=False, comment="Post title")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    tags = relationship(
        "TagORM", secondary="post_tags", back_populates="posts", lazy="select"
    )

    def __repr__(self) -> str:
        return f"<PostORM(id={self.id}, number={self.number})>"
