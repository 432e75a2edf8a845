"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from townhall.core.exceptions import AuthenticationFailure
from townhall.core.security import decode_access_token
from townhall.db.session import get_db
from townhall.models import User
from townhall.services.users import get_user

# Missing credentials are reported by the dependencies below, not by the scheme.
bearer_scheme = HTTPBearer(auto_error=False)

BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user_id(credentials: BearerDep) -> int:
    """Return the user id asserted by a valid bearer token.

    Raises:
        AuthenticationFailure: If the token is missing, malformed or expired.
    """
    if credentials is None:
        raise AuthenticationFailure("Not authenticated")
    return decode_access_token(credentials.credentials)


def get_optional_user_id(credentials: BearerDep) -> int | None:
    """Return the caller's user id, or None for anonymous callers.

    An invalid token is treated the same as no token at all.
    """
    if credentials is None:
        return None
    try:
        return decode_access_token(credentials.credentials)
    except AuthenticationFailure:
        return None


CurrentUserIdDep = Annotated[int, Depends(get_current_user_id)]
OptionalUserIdDep = Annotated[int | None, Depends(get_optional_user_id)]


def get_current_user(user_id: CurrentUserIdDep, db: SessionDep) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        user_id: Identifier taken from the verified token
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        AuthenticationFailure: If the token is invalid or the user no longer exists
    """
    user = get_user(db, user_id)
    if user is None:
        raise AuthenticationFailure("User not found")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
