"""
Portal chat message models.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class MessageCreate(BaseModel):
    """Schema for sending a message."""

    content: str = Field(..., max_length=5000)
    receiver_id: Optional[UUID] = Field(
        None,
        description="Recipient user. Omit to write to the agency.",
    )

    @field_validator("content")
    @classmethod
    def strip_content(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message content is required")
        return value


class MessageSender(BaseModel):
    """Public details of the user who sent a message."""

    id: UUID
    name: str
    email: str


class Message(BaseModel):
    """Stored message with its sender."""

    id: UUID
    sender_id: UUID
    receiver_id: Optional[UUID] = None
    content: str
    created_at: datetime
    sender: Optional[MessageSender] = None

    class Config:
        from_attributes = True
