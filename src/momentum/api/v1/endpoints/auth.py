# src/momentum/api/v1/endpoints/auth.py
"""Authentication endpoints for the Momentum API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from momentum.api.v1.dependencies import UserServiceDep
from momentum.core.security import create_access_token
from momentum.models import User
from momentum.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from momentum.services.errors import NotAllowedError

router = APIRouter(prefix="/auth", tags=["authentication"])


def _token_for(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
async def register(payload: RegisterRequest, users: UserServiceDep) -> TokenResponse:
    """Create an account and return a bearer token for it."""
    try:
        user = users.register(payload.username, payload.password)
    except NotAllowedError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err
    return _token_for(user)


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, users: UserServiceDep) -> TokenResponse:
    """Exchange a username and password for a bearer token."""
    try:
        user = users.authenticate(payload.username, payload.password)
    except NotAllowedError as err:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(err)) from err
    return _token_for(user)
