"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    """Short human-readable outcome of an operation."""

    msg: str = Field(..., description="Status message for the client.")
