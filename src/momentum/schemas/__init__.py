# src/momentum/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import StatusResponse
from .message import (
    MessageActionResponse,
    MessageCreate,
    MessageResponse,
    MessageUpdate,
)
from .user import LoginRequest, RegisterRequest, TokenResponse, UserResponse

__all__ = [
    "StatusResponse",
    "MessageActionResponse", "MessageCreate", "MessageResponse", "MessageUpdate",
    "LoginRequest", "RegisterRequest", "TokenResponse", "UserResponse",
]
