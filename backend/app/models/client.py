"""
Client model definitions.

A client is the company profile attached to a CLIENT user account.
"""

from datetime import datetime
from typing import Optional
from urllib.parse import urlparse
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from app.models.milestone import Milestone

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _clean_optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _validate_website(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("Enter a valid URL")
    return value


class ClientProfileFields(BaseModel):
    """Editable company profile fields."""

    company_name: str = Field(..., min_length=2, max_length=200, description="Company name")
    industry: Optional[str] = Field(None, max_length=200)
    website: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def normalize_optional_fields(self):
        self.industry = _clean_optional(self.industry)
        self.website = _validate_website(_clean_optional(self.website))
        self.phone = _clean_optional(self.phone)
        self.address = _clean_optional(self.address)
        return self


class ClientCreate(ClientProfileFields):
    """Schema for onboarding a new client (user account + profile)."""

    name: str = Field(..., min_length=2, max_length=255, description="Contact name")
    email: str = Field(..., max_length=255, pattern=_EMAIL_PATTERN)
    password: Optional[str] = Field(
        None,
        min_length=8,
        max_length=128,
        description="Initial password. Generated when omitted.",
    )


class ClientUpdate(ClientProfileFields):
    """Schema for updating a client. Email and password are not editable here."""

    name: str = Field(..., min_length=2, max_length=255, description="Contact name")


class Client(ClientProfileFields):
    """Complete client model."""

    id: UUID
    user_id: UUID
    is_active: bool = True
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ClientWithMilestones(Client):
    """Client with its ordered milestone checklist."""

    milestones: list[Milestone] = Field(default_factory=list)
