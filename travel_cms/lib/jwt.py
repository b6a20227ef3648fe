"""Bearer tokens for back-office users.

HS256 (by default) tokens carry `sub` (user id), `role`, `iat` and `exp`.
The role claim is informational: admin routes check the role stored on
the user row, so demoting a user takes effect before their token expires.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError

from travel_cms.lib.settings import settings


REQUIRED_CLAIMS = ["sub", "exp"]


def create_access_token(
    user_id: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a token for a user.

    Args:
        user_id: User UUID, stored as the 'sub' claim
        role: ADMIN or EDITOR
        expires_delta: Lifetime; defaults to JWT_EXPIRATION_MINUTES

    Example:
        >>> token = create_access_token("123e4567-e89b-12d3-a456-426614174000", "ADMIN")
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_delta if expires_delta is not None else timedelta(
        minutes=settings.jwt_expiration_minutes
    )

    return jwt.encode(
        {"sub": user_id, "role": role, "iat": now, "exp": now + lifetime},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def verify_token(token: str) -> dict:
    """Decode a token, checking signature, expiry and required claims.

    Raises:
        InvalidTokenError: bad signature, expired, malformed or missing sub/exp
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": REQUIRED_CLAIMS},
    )


def token_subject(token: str) -> UUID:
    """User id a valid token was issued for.

    Raises:
        InvalidTokenError: token invalid or its subject is not a UUID
    """
    subject = verify_token(token)["sub"]
    try:
        return UUID(str(subject))
    except ValueError:
        raise InvalidTokenError(f"Token subject is not a user id: {subject!r}")


__all__ = [
    "InvalidTokenError",
    "create_access_token",
    "verify_token",
    "token_subject",
]
