"""
Portal-wide settings models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ChatSettingsUpdate(BaseModel):
    """WhatsApp and Telegram contact details configured by an admin."""

    whatsapp_number: Optional[str] = Field(
        None,
        pattern=r"^\d{10,15}$",
        description="Phone number, 10-15 digits",
    )
    telegram_username: Optional[str] = Field(
        None,
        pattern=r"^[a-zA-Z0-9_]{5,32}$",
        description="Username, 5-32 letters, digits or underscores",
    )

    @model_validator(mode="before")
    @classmethod
    def blank_to_none(cls, data):
        if isinstance(data, dict):
            return {key: (None if value == "" else value) for key, value in data.items()}
        return data


class ChatSettings(ChatSettingsUpdate):
    """Stored chat settings."""

    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChatLinks(BaseModel):
    """Ready-to-open chat links for a client."""

    whatsapp_url: Optional[str] = None
    telegram_url: Optional[str] = None
    message: str
