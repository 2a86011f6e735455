# src/momentum/models/message.py
"""Models describing messages exchanged between two users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from momentum.db.session import Base
from momentum.db.time import utcnow


class Message(Base):
    """One half of a message exchange.

    A record is a draft, a sent copy (owned by the sender) or a received copy
    (created for the recipient at send time). Sent and received copies point
    at each other through ``mirror_id``.
    """

    __tablename__ = "message"
    # Never reuse the id of a deleted row; a stale mirror_id must not resolve.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sender_id: Mapped[int] = mapped_column(Integer, ForeignKey("user_account.id"), index=True, nullable=False)
    recipient_id: Mapped[int] = mapped_column(Integer, ForeignKey("user_account.id"), index=True, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    is_draft: Mapped[bool] = mapped_column(default=False, nullable=False)
    drafted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    is_sent: Mapped[bool] = mapped_column(default=False, nullable=False)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    is_received: Mapped[bool] = mapped_column(default=False, nullable=False)
    received_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # No FK constraint: a dangling reference must stay observable for auditing.
    mirror_id: Mapped[int | None] = mapped_column(Integer, index=True, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    @property
    def state(self) -> str:
        """Return the lifecycle state name of this record."""
        if self.is_draft:
            return "draft"
        if self.is_sent:
            return "sent"
        if self.is_received:
            return "received"
        return "unknown"
