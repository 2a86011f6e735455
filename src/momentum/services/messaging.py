"""Message lifecycle: drafting, sending, editing and deleting mirrored pairs."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Session, aliased

from momentum.db.time import utcnow
from momentum.models import Message
from momentum.repositories.record_store import RecordStore
from momentum.services.errors import (
    EditorNotMatchError,
    IntegrityViolationError,
    InvalidStateError,
    NotADraftError,
    NotAllowedError,
    NotFoundError,
    NotSentError,
)

logger = logging.getLogger(__name__)

# Newest first, with the id breaking ties between rows stamped in the same instant.
NEWEST_FIRST = (Message.created_at.desc(), Message.id.desc())


class MessagingService:
    """Service handling the draft -> sent -> received message lifecycle.

    Sending a draft keeps its id and creates a received twin for the
    recipient. The two records reference each other through ``mirror_id``;
    every operation that touches a sent message touches both halves inside
    one transaction.
    """

    def __init__(self, db: Session) -> None:
        """Initialize the service with a database session it may commit."""
        self.db = db
        self.messages: RecordStore[Message] = RecordStore(db, Message)

    @contextmanager
    def _unit_of_work(self) -> Iterator[None]:
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _get(self, message_id: int) -> Message:
        message = self.messages.read_one({"id": message_id})
        if message is None:
            raise NotFoundError(f"Message {message_id} does not exist.")
        return message

    def _reload(self, message_id: int) -> Message:
        message = self._get(message_id)
        self.db.refresh(message)
        return message

    def _mirror_of(self, message: Message) -> Message:
        if message.mirror_id is None:
            raise IntegrityViolationError(message.id, None)
        mirror = self.messages.read_one({"id": message.mirror_id})
        if mirror is None:
            raise IntegrityViolationError(message.id, message.mirror_id)
        # A twin must point back and sit on the opposite side of the pair.
        if (
            mirror.mirror_id != message.id
            or mirror.is_sent != message.is_received
            or mirror.is_received != message.is_sent
        ):
            raise IntegrityViolationError(message.id, message.mirror_id)
        return mirror

    def _update_pair(self, message: Message, fields: dict[str, Any]) -> None:
        """Apply `fields` to a sent message and its received twin.

        All callers that mutate a sent message go through here so both halves
        always carry the same content.
        """
        mirror = self._mirror_of(message)
        self.messages.partial_update({"id": message.id}, fields)
        self.messages.partial_update({"id": mirror.id}, fields)

    # Guards

    def assert_sender_is(self, actor: int, message_id: int) -> Message:
        """Return the message if `actor` sent (or drafted) it.

        Raises:
            NotFoundError: If the message does not exist.
            EditorNotMatchError: If `actor` is not the sender.
        """
        message = self._get(message_id)
        if message.sender_id != actor:
            raise EditorNotMatchError(actor, message_id)
        return message

    def assert_participant(self, actor: int, message_id: int) -> Message:
        """Return the message if `actor` is its sender or recipient."""
        message = self._get(message_id)
        if actor not in (message.sender_id, message.recipient_id):
            raise NotAllowedError(f"User {actor} is not a participant of message {message_id}.")
        return message

    # Drafts

    def draft(self, sender: int, recipient: int, content: str) -> Message:
        """Create a message draft from `sender` to `recipient`."""
        with self._unit_of_work():
            message = self.messages.create(
                sender_id=sender,
                recipient_id=recipient,
                content=content,
                is_draft=True,
                drafted_at=utcnow(),
            )
        logger.info("Drafted message %s from %s to %s", message.id, sender, recipient)
        return message

    def list_drafts(self, sender: int, limit: int | None = None) -> list[Message]:
        """Return the drafts written by `sender`, newest first."""
        return self.messages.read_many(
            {"sender_id": sender, "is_draft": True},
            order_by=NEWEST_FIRST,
            limit=limit,
        )

    def edit_draft(
        self,
        message_id: int,
        content: str | None = None,
        recipient: int | None = None,
    ) -> Message:
        """Edit the text and/or recipient of a draft.

        Arguments left as None keep their current value.

        Raises:
            NotFoundError: If the message does not exist.
            NotADraftError: If the message has already been sent or is a received copy.
        """
        message = self._get(message_id)
        if not message.is_draft:
            raise NotADraftError(message_id)

        fields: dict[str, Any] = {}
        if content is not None:
            fields["content"] = content
        if recipient is not None:
            fields["recipient_id"] = recipient
        if fields:
            with self._unit_of_work():
                updated = self.messages.partial_update({"id": message_id, "is_draft": True}, fields)
                if updated != 1:
                    raise NotADraftError(message_id)
            logger.debug("Edited draft %s fields=%s", message_id, sorted(fields))
        return self._reload(message_id)

    def delete_draft(self, actor: int, message_id: int) -> None:
        """Delete a draft written by `actor`."""
        message = self.assert_sender_is(actor, message_id)
        if not message.is_draft:
            raise NotADraftError(message_id)
        with self._unit_of_work():
            self.messages.delete({"id": message_id})
        logger.info("Deleted draft %s", message_id)

    # Sending

    def send(self, message_id: int, sender: int, recipient: int) -> Message:
        """Send a draft, creating the recipient's copy.

        Raises:
            NotFoundError: If the message does not exist.
            NotAllowedError: If the message was not drafted by `sender` or is
                not addressed to `recipient`.
            NotADraftError: If the message is not (or no longer) a draft.
        """
        message = self._get(message_id)
        if message.sender_id != sender:
            raise NotAllowedError(f"This message was not drafted by sender {sender}.")
        if message.recipient_id != recipient:
            raise NotAllowedError(f"This message is not addressed to contact {recipient}.")
        if not message.is_draft:
            raise NotADraftError(message_id)

        now = utcnow()
        with self._unit_of_work():
            claimed = self.messages.partial_update(
                {"id": message_id, "is_draft": True},
                {
                    "is_draft": False,
                    "drafted_at": None,
                    "is_sent": True,
                    "sent_at": now,
                },
            )
            if claimed != 1:
                # Another request sent this draft between our read and write.
                raise NotADraftError(message_id)
            received = self.messages.create(
                sender_id=message.sender_id,
                recipient_id=message.recipient_id,
                content=message.content,
                is_received=True,
                received_at=now,
                mirror_id=message_id,
            )
            self.messages.partial_update({"id": message_id}, {"mirror_id": received.id})

        logger.info("Sent message %s to %s (received copy %s)", message_id, recipient, received.id)
        return self._reload(message_id)

    def list_sent(self, sender: int, recipient: int, limit: int | None = None) -> list[Message]:
        """Return the sender-side copies of messages `sender` sent to `recipient`."""
        return self.messages.read_many(
            {"sender_id": sender, "recipient_id": recipient, "is_sent": True},
            order_by=NEWEST_FIRST,
            limit=limit,
        )

    def list_received(self, sender: int, recipient: int, limit: int | None = None) -> list[Message]:
        """Return the recipient-side copies of messages `sender` sent to `recipient`.

        The pair is always given from the original message's perspective.
        """
        return self.messages.read_many(
            {"sender_id": sender, "recipient_id": recipient, "is_received": True},
            order_by=NEWEST_FIRST,
            limit=limit,
        )

    # Sent messages

    def edit_sent(self, message_id: int, content: str | None = None) -> Message:
        """Edit the text of a sent message on both halves of the pair.

        Raises:
            NotFoundError: If the message does not exist.
            NotSentError: If the message is not a sender-side sent record.
            IntegrityViolationError: If the received copy cannot be found.
        """
        message = self._get(message_id)
        if not message.is_sent:
            raise NotSentError(message_id)
        if content is None:
            return message

        mirror_id = message.mirror_id
        try:
            with self._unit_of_work():
                self._update_pair(message, {"content": content})
        except IntegrityViolationError:
            logger.error("Refusing to edit message %s: mirror %s unresolved", message_id, mirror_id)
            raise
        logger.debug("Edited sent message %s and mirror %s", message_id, mirror_id)
        return self._reload(message_id)

    def delete_sent(self, actor: int, message_id: int) -> None:
        """Delete a sent message together with the recipient's copy."""
        message = self.assert_sender_is(actor, message_id)
        if not message.is_sent:
            raise NotSentError(message_id)

        mirror_id = message.mirror_id
        try:
            with self._unit_of_work():
                mirror = self._mirror_of(message)
                self.messages.delete({"id": mirror.id})
                self.messages.delete({"id": message_id})
        except IntegrityViolationError:
            logger.error("Refusing to delete message %s: mirror %s unresolved", message_id, mirror_id)
            raise
        logger.info("Deleted sent message %s and mirror %s", message_id, mirror_id)

    def delete(self, actor: int, message_id: int) -> str:
        """Delete a draft or a sent pair, whichever `message_id` is.

        Returns:
            The lifecycle state the message was in.

        Raises:
            InvalidStateError: If the message is a received copy; those are
                removed only together with their sent twin.
        """
        message = self.assert_sender_is(actor, message_id)
        if message.is_draft:
            self.delete_draft(actor, message_id)
            return "draft"
        if message.is_sent:
            self.delete_sent(actor, message_id)
            return "sent"
        raise InvalidStateError(
            f"Message {message_id} is a received copy; delete the sent message instead."
        )

    # Reading

    def read(self, actor: int, message_id: int) -> Message:
        """Return any message `actor` sent or received."""
        return self.assert_participant(actor, message_id)

    def find_orphans(self) -> list[Message]:
        """Return sent or received records whose mirror does not resolve.

        A record whose ``mirror_id`` lands on a row that does not point back,
        or that sits on the same side of the pair, counts as an orphan.
        """
        mirror = aliased(Message)
        stmt = (
            select(Message)
            .outerjoin(
                mirror,
                and_(
                    Message.mirror_id == mirror.id,
                    mirror.mirror_id == Message.id,
                    mirror.is_sent == Message.is_received,
                    mirror.is_received == Message.is_sent,
                ),
            )
            .where(
                or_(Message.is_sent.is_(True), Message.is_received.is_(True)),
                mirror.id.is_(None),
            )
            .order_by(Message.id)
        )
        return list(self.db.execute(stmt).scalars())
