# src/momentum/services/__init__.py
"""Business logic services for the Momentum application."""

from .messaging import MessagingService
from .user_service import UserService

__all__ = [
    "MessagingService",
    "UserService",
]
