"""Shared fixtures for the tags service test-suite.

The environment is pinned before any application module is imported so
that the engine created in ``utils.dependencies`` points at SQLite.
"""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "tags-service-test-secret-0123456789abcdef")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from dataclasses import replace
from typing import Dict, List, Optional, Set, Tuple

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from domain.entities.post import PostEntity
from domain.entities.tag import TagEntity
from domain.entities.user import Role, UserEntity
from domain.queries.base import Query
from domain.queries.post_queries import GetPostByNumber, GetPostByNumberHandler
from domain.queries.tag_queries import GetTagBySlug, GetTagBySlugHandler
from domain.repositories.post_repository import PostRepositoryInterface
from domain.repositories.tag_repository import TagRepositoryInterface
from domain.services.dispatcher import Dispatcher
from infrastructure.models import associations  # noqa: F401
from infrastructure.models.base import Base
from infrastructure.models.post_orm import PostORM  # noqa: F401
from infrastructure.models.tag_orm import TagORM  # noqa: F401
from utils.slug import make_slug


class InMemoryTagRepository(TagRepositoryInterface):
    """Dictionary-backed tag repository."""

    def __init__(self) -> None:
        self.tags: Dict[int, TagEntity] = {}
        self.assignments: Set[Tuple[int, int]] = set()
        self._next_id = 1

    def add(self, name: str, color: str = "FF0000", is_public: bool = True) -> TagEntity:
        tag = TagEntity(
            id=self._next_id,
            name=name,
            slug=make_slug(name),
            color=color,
            is_public=is_public,
        )
        self.tags[tag.id] = tag
        self._next_id += 1
        return tag

    async def get_all(self, db_session) -> List[TagEntity]:
        return list(self.tags.values())

    async def get_by_slug(self, db_session, slug: str) -> Optional[TagEntity]:
        for tag in self.tags.values():
            if tag.slug == slug:
                return tag
        return None

    async def save(self, db_session, tag: TagEntity) -> TagEntity:
        if tag.is_new():
            tag = replace(tag, id=self._next_id)
            self._next_id += 1
        self.tags[tag.id] = tag
        return tag

    async def delete(self, db_session, tag_id: int) -> bool:
        self.assignments = {pair for pair in self.assignments if pair[0] != tag_id}
        return self.tags.pop(tag_id, None) is not None

    async def assign(self, db_session, tag_id: int, post_id: int) -> None:
        self.assignments.add((tag_id, post_id))

    async def unassign(self, db_session, tag_id: int, post_id: int) -> None:
        self.assignments.discard((tag_id, post_id))


class InMemoryPostRepository(PostRepositoryInterface):
    """Dictionary-backed post repository."""

    def __init__(self) -> None:
        self.posts: Dict[int, PostEntity] = {}

    def add(self, number: int, title: str = "Dark mode please") -> PostEntity:
        post = PostEntity(id=number * 10, number=number, title=title)
        self.posts[number] = post
        return post

    async def get_by_number(self, db_session, number: int) -> Optional[PostEntity]:
        return self.posts.get(number)


class RecordingDispatcher(Dispatcher):
    """Dispatcher that remembers every query it was asked to answer."""

    def __init__(self, db_session=None) -> None:
        super().__init__(db_session)
        self.dispatched: List[Query] = []

    async def dispatch(self, query: Query):
        self.dispatched.append(query)
        return await super().dispatch(query)


@pytest.fixture
def tag_repository() -> InMemoryTagRepository:
    return InMemoryTagRepository()


@pytest.fixture
def post_repository() -> InMemoryPostRepository:
    return InMemoryPostRepository()


@pytest.fixture
def dispatcher(tag_repository, post_repository) -> RecordingDispatcher:
    """Recording dispatcher over the in-memory repositories."""
    recording = RecordingDispatcher()
    recording.register(GetTagBySlug, GetTagBySlugHandler(tag_repository))
    recording.register(GetPostByNumber, GetPostByNumberHandler(post_repository))
    return recording


@pytest.fixture
def admin() -> UserEntity:
    return UserEntity(id="admin-1", name="Ada", role=Role.ADMINISTRATOR)


@pytest.fixture
def collaborator() -> UserEntity:
    return UserEntity(id="collab-1", name="Cory", role=Role.COLLABORATOR)


@pytest.fixture
def visitor() -> UserEntity:
    return UserEntity(id="visitor-1", name="Vic", role=Role.VISITOR)


@pytest.fixture
def session_factory():
    """Session factory over a private in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
