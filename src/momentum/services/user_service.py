"""Registration, authentication and lookup of user identities."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from momentum.core import security
from momentum.models.user import User
from momentum.repositories.record_store import RecordStore
from momentum.services.errors import NotAllowedError, NotFoundError

__all__ = ["UserService"]

logger = logging.getLogger(__name__)


class UserService:
    """CRUD-style helpers for managing users."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.users: RecordStore[User] = RecordStore(db, User)

    def register(self, username: str, password: str) -> User:
        """Persist a new user with a hashed password.

        Raises:
            ValueError: If the username is blank.
            NotAllowedError: If the username is already taken.
        """
        username = username.strip()
        if not username:
            raise ValueError("Username should be at least 1 character long")
        if self.users.read_one({"username": username}) is not None:
            raise NotAllowedError(f"User with username {username} already exists!")

        try:
            user = self.users.create(
                username=username,
                password_hash=security.hash_password(password),
            )
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            raise NotAllowedError(f"User with username {username} already exists!") from err
        logger.info("Registered user %s (%s)", user.id, username)
        return user

    def authenticate(self, username: str, password: str) -> User:
        """Return the user whose credentials match.

        Raises:
            NotAllowedError: If the username is unknown or the password is wrong.
        """
        user = self.users.read_one({"username": username})
        if user is None or not security.verify_password(password, user.password_hash):
            raise NotAllowedError("Username or password is incorrect.")
        return user

    def get_by_username(self, username: str) -> User:
        """Return a single user by username."""
        user = self.users.read_one({"username": username})
        if user is None:
            raise NotFoundError(f"User with username {username} does not exist!")
        return user
