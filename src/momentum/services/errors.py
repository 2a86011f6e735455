"""Error types raised by the messaging and user services."""

from __future__ import annotations


class MessagingError(Exception):
    """Base class for domain errors surfaced to API callers."""


class NotFoundError(MessagingError):
    """Raised when a referenced record does not exist."""


class NotAllowedError(MessagingError):
    """Raised when the acting user may not perform an operation."""


class EditorNotMatchError(NotAllowedError):
    """Raised when an action is attempted on a message by someone other than its sender."""

    def __init__(self, editor: int, message_id: int) -> None:
        self.editor = editor
        self.message_id = message_id
        super().__init__(f"User {editor} is not the sender of message {message_id}!")


class InvalidStateError(MessagingError):
    """Raised when a message is in the wrong lifecycle state for an operation."""


class NotADraftError(InvalidStateError):
    """Raised when a draft-only operation targets a message that is not a draft."""

    def __init__(self, message_id: int) -> None:
        self.message_id = message_id
        super().__init__(f"Message {message_id} is not a draft!")


class NotSentError(InvalidStateError):
    """Raised when a sent-only operation targets a message that has not been sent."""

    def __init__(self, message_id: int) -> None:
        self.message_id = message_id
        super().__init__(f"Message {message_id} has not been sent!")


class IntegrityViolationError(MessagingError):
    """Raised when a sent or received record has no resolvable mirror.

    A mirror resolves only if it exists, points back at the record and sits on
    the opposite side of the pair.

    This is a server-side consistency fault, not a caller mistake.
    """

    def __init__(self, message_id: int, mirror_id: int | None) -> None:
        self.message_id = message_id
        self.mirror_id = mirror_id
        if mirror_id is None:
            detail = f"Message {message_id} has no mirror reference"
        else:
            detail = f"Message {message_id} points at missing or mismatched mirror {mirror_id}"
        super().__init__(detail)
