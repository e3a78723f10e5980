"""Database, dispatcher and caller dependencies for the Tags Service.

This module provides dependency injection functions for FastAPI,
including database session management, query dispatching and caller
resolution.

Functions:
    - get_db: Database session factory with automatic cleanup
    - get_dispatcher: Query dispatcher bound to the request's session
    - get_tag_service: Tag service with its repository
    - get_current_user: Caller identity from the bearer token, if any
"""

import logging
from typing import Generator, Optional

from domain.entities.user import UserEntity
from domain.services.dispatcher import Dispatcher, create_dispatcher
from domain.services.tag_service import TagService
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from infrastructure.repositories.sqlalchemy_post_repository import (
    SqlAlchemyPostRepository,
)
from infrastructure.repositories.sqlalchemy_tag_repository import (
    SqlAlchemyTagRepository,
)
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .auth import InvalidTokenError, decode_access_token, user_from_claims
from .config import DATABASE_URL, LOG_LEVEL

# Configure logging
logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

# Database setup
engine = create_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Anonymous callers are allowed through; actions decide what they may do
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Get database session with automatic cleanup.

    Yields:
        Session: SQLAlchemy database session that automatically closes after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_dispatcher(db: Session = Depends(get_db)) -> Dispatcher:
    """Create the query dispatcher for this request.

    Args:
        db (Session): Fresh database session for this request.

    Returns:
        Dispatcher: Dispatcher with the SQLAlchemy-backed handlers registered.
    """
    return create_dispatcher(db, SqlAlchemyTagRepository(), SqlAlchemyPostRepository())


def get_tag_service() -> TagService:
    """Create and configure the tag service with repository dependency.

    The session is injected per-request in each endpoint method.

    Returns:
        TagService: Configured domain service ready for use.
    """
    return TagService(SqlAlchemyTagRepository())


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[UserEntity]:
    """Resolve the caller from the bearer token.

    Args:
        credentials (Optional[HTTPAuthorizationCredentials]): Parsed Authorization header.

    Returns:
        Optional[UserEntity]: The caller, or None when no token was sent.

    Raises:
        HTTPException: 401 if a token was sent but cannot be verified.
    """
    if credentials is None:
        return None

    try:
        return user_from_claims(decode_access_token(credentials.credentials))
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)
        ) from e
