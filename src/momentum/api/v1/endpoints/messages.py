# src/momentum/api/v1/endpoints/messages.py
"""Message endpoints for the Momentum API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from momentum.api.v1.dependencies import (
    CurrentUserDep,
    MessagingServiceDep,
    UserServiceDep,
)
from momentum.core.settings import settings
from momentum.models import Message
from momentum.schemas.common import StatusResponse
from momentum.schemas.message import (
    MessageActionResponse,
    MessageCreate,
    MessageResponse,
    MessageUpdate,
)
from momentum.services.errors import InvalidStateError

router = APIRouter(prefix="/messages", tags=["messages"])

LIST_LIMIT_MAX = settings.message_list_limit


def _action(msg: str, message: Message) -> MessageActionResponse:
    return MessageActionResponse(msg=msg, message=MessageResponse.model_validate(message))


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=MessageActionResponse)
async def write_draft(
    payload: MessageCreate,
    current_user: CurrentUserDep,
    messaging: MessagingServiceDep,
    users: UserServiceDep,
) -> MessageActionResponse:
    """Draft a message for one of the current user's contacts."""
    contact = users.get_by_username(payload.contact)
    draft = messaging.draft(current_user.id, contact.id, payload.content)
    return _action("Message draft created successfully!", draft)


@router.get("/drafts", response_model=list[MessageResponse])
async def read_drafts(
    current_user: CurrentUserDep,
    messaging: MessagingServiceDep,
    limit: int = Query(50, ge=1, le=LIST_LIMIT_MAX),
) -> list[Message]:
    """Get the drafts written by the current user."""
    return messaging.list_drafts(current_user.id, limit=limit)


@router.get("/sent", response_model=list[MessageResponse])
async def read_sent(
    current_user: CurrentUserDep,
    messaging: MessagingServiceDep,
    users: UserServiceDep,
    contact: str = Query(..., min_length=1, description="Username of the recipient"),
    limit: int = Query(50, ge=1, le=LIST_LIMIT_MAX),
) -> list[Message]:
    """Get messages the current user sent to a contact."""
    recipient = users.get_by_username(contact)
    return messaging.list_sent(current_user.id, recipient.id, limit=limit)


@router.get("/received", response_model=list[MessageResponse])
async def read_received(
    current_user: CurrentUserDep,
    messaging: MessagingServiceDep,
    users: UserServiceDep,
    contact: str = Query(..., min_length=1, description="Username of the sender"),
    limit: int = Query(50, ge=1, le=LIST_LIMIT_MAX),
) -> list[Message]:
    """Get messages the current user received from a contact."""
    sender = users.get_by_username(contact)
    return messaging.list_received(sender.id, current_user.id, limit=limit)


@router.get("/{message_id}", response_model=MessageResponse)
async def read_message(
    message_id: int,
    current_user: CurrentUserDep,
    messaging: MessagingServiceDep,
) -> Message:
    """Get a single message the current user sent or received."""
    return messaging.read(current_user.id, message_id)


@router.patch("/{message_id}/send", response_model=MessageActionResponse)
async def send_message(
    message_id: int,
    current_user: CurrentUserDep,
    messaging: MessagingServiceDep,
    users: UserServiceDep,
    contact: str | None = Query(None, min_length=1, description="Expected recipient username"),
) -> MessageActionResponse:
    """Send one of the current user's drafts.

    When `contact` is given the draft must be addressed to that user.
    """
    draft = messaging.assert_sender_is(current_user.id, message_id)
    recipient_id = users.get_by_username(contact).id if contact else draft.recipient_id
    sent = messaging.send(message_id, current_user.id, recipient_id)
    return _action("Message sent successfully!", sent)


@router.patch("/{message_id}", response_model=MessageActionResponse)
async def edit_message(
    message_id: int,
    payload: MessageUpdate,
    current_user: CurrentUserDep,
    messaging: MessagingServiceDep,
    users: UserServiceDep,
) -> MessageActionResponse:
    """Edit a draft (content and contact) or a sent message (content only)."""
    message = messaging.assert_sender_is(current_user.id, message_id)
    recipient_id = users.get_by_username(payload.contact).id if payload.contact else None

    if message.is_draft:
        edited = messaging.edit_draft(message_id, content=payload.content, recipient=recipient_id)
        return _action("Message updated successfully!", edited)

    if message.is_sent:
        if recipient_id is not None and recipient_id != message.recipient_id:
            raise InvalidStateError(f"The recipient of sent message {message_id} cannot change.")
        edited = messaging.edit_sent(message_id, content=payload.content)
        return _action("Sent message updated successfully!", edited)

    raise InvalidStateError(f"Message {message_id} is a received copy and cannot be edited.")


@router.delete("/{message_id}", response_model=StatusResponse)
async def delete_message(
    message_id: int,
    current_user: CurrentUserDep,
    messaging: MessagingServiceDep,
) -> StatusResponse:
    """Delete a draft, or a sent message together with the recipient's copy."""
    messaging.delete(current_user.id, message_id)
    return StatusResponse(msg="Message deleted successfully!")
