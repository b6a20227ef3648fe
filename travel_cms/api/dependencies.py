"""
FastAPI dependencies: database sessions and back-office authentication.

Admin capability is decided from the role stored on the user row, never
from the token's role claim.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from travel_cms.api.middleware.error_handler import UnauthorizedException
from travel_cms.lib.db import get_db
from travel_cms.lib.jwt import InvalidTokenError, token_subject
from travel_cms.lib.logging import get_logger
from travel_cms.models.users import User, UserRole


logger = get_logger(__name__)

# Missing tokens are reported by get_current_user so every failure is a 401
bearer = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the bearer token to an active user.

    Raises:
        UnauthorizedException: token missing or invalid, or user unknown/inactive
    """
    if credentials is None:
        raise UnauthorizedException()

    try:
        user_id = token_subject(credentials.credentials)
    except InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise UnauthorizedException("Invalid authentication token")

    user = db.get(User, user_id)
    if user is None or not user.is_active:
        raise UnauthorizedException()
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Like get_current_user, but anonymous or invalid callers get None."""
    if credentials is None:
        return None
    try:
        return get_current_user(credentials, db)
    except UnauthorizedException:
        return None


def is_admin(user: Optional[User]) -> bool:
    return user is not None and user.role == UserRole.ADMIN


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Gate for back-office routes: authenticated non-admins also get 401."""
    if not is_admin(user):
        logger.info(f"User {user.id} lacks the admin role")
        raise UnauthorizedException()
    return user
