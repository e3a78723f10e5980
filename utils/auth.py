"""Access token utilities for resolving the calling user.

This module decodes bearer tokens issued by the identity provider and turns
their claims into the caller identity used by actions.

Functions:
    - decode_access_token: Verify a token and return its claims
    - user_from_claims: Build a UserEntity from token claims

Architecture:
    Token handling is separated from other dependencies so that it can be
    tested without a running application.
"""

import logging

import jwt
from domain.entities.user import Role, UserEntity

from .config import JWT_ALGORITHM, JWT_SECRET

logger = logging.getLogger(__name__)


class InvalidTokenError(Exception):
    """Exception raised when a bearer token cannot be trusted."""

    pass


def decode_access_token(token: str) -> dict:
    """Verify a bearer token and return its claims.

    Args:
        token (str): Encoded JWT.

    Returns:
        dict: Verified claims.

    Raises:
        InvalidTokenError: If the signature, expiry or format is invalid.

    Example:
        >>> claims = decode_access_token(token)
        >>> print(claims["sub"])
        "keycloak-user-uuid"
    """
    try:
        return jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except jwt.PyJWTError as e:
        logger.error(f"Token verification failed: {e}")
        raise InvalidTokenError("Invalid token") from e


def user_from_claims(payload: dict) -> UserEntity:
    """Build the caller identity from verified claims.

    Roles are read from the Keycloak ``realm_access.roles`` claim; the highest
    known role wins.

    Args:
        payload (dict): Verified token claims.

    Returns:
        UserEntity: The caller.

    Raises:
        InvalidTokenError: If the token has no subject.
    """
    user_id = payload.get("sub")
    if not user_id:
        raise InvalidTokenError("Token has no subject")

    roles = payload.get("realm_access", {}).get("roles", [])
    return UserEntity(
        id=user_id,
        name=payload.get("name") or payload.get("preferred_username") or "",
        role=Role.from_names(roles),
    )
