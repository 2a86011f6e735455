# src/momentum/models/__init__.py
"""SQLAlchemy models for the Momentum application."""

from .message import Message
from .user import User

__all__ = [
    "Message",
    "User",
]
