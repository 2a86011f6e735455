"""Shared API dependencies for authentication and service construction."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from momentum.core.security import decode_access_token
from momentum.db.session import get_db
from momentum.models import User
from momentum.services.messaging import MessagingService
from momentum.services.user_service import UserService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_user_service(db: SessionDep) -> UserService:
    """Return a user service bound to the request session."""
    return UserService(db)


def get_messaging_service(db: SessionDep) -> MessagingService:
    """Return a messaging service bound to the request session."""
    return MessagingService(db)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
MessagingServiceDep = Annotated[MessagingService, Depends(get_messaging_service)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If token is invalid or user not found
    """
    try:
        user_id = decode_access_token(credentials.credentials)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
