"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        """Reject usernames made only of whitespace."""
        value = value.strip()
        if not value:
            raise ValueError("Username should be at least 1 character long")
        return value


class LoginRequest(BaseModel):
    """Schema for password login."""

    username: str
    password: str


class UserResponse(BaseModel):
    """Public view of a user."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Bearer token issued after registration or login."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
