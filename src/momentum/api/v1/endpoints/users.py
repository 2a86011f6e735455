"""User lookup endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from momentum.api.v1.dependencies import CurrentUserDep, UserServiceDep
from momentum.models import User
from momentum.schemas.user import UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUserDep) -> User:
    """Return the authenticated user."""
    return current_user


@router.get("/{username}", response_model=UserResponse)
async def get_user(username: str, users: UserServiceDep) -> User:
    """Return the public view of a user by username."""
    return users.get_by_username(username)
