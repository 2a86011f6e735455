"""Message-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    """Schema for drafting a new message."""

    contact: str = Field(..., min_length=1, description="Username of the intended recipient")
    content: str = Field("", description="Message text; may be empty")


class MessageUpdate(BaseModel):
    """Schema for editing a message.

    Omitted fields are left unchanged. The contact can only be changed while
    the message is still a draft.
    """

    content: str | None = Field(None, description="New message text")
    contact: str | None = Field(None, min_length=1, description="Username of a new recipient")


class MessageResponse(BaseModel):
    """Schema for message information returned by the API."""

    id: int
    sender_id: int
    recipient_id: int
    content: str
    state: str

    is_draft: bool
    drafted_at: datetime | None
    is_sent: bool
    sent_at: datetime | None
    is_received: bool
    received_at: datetime | None

    mirror_id: int | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageActionResponse(BaseModel):
    """Status message plus the record an operation produced."""

    msg: str
    message: MessageResponse
