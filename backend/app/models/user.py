"""
User account models for authentication.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.enums import UserRole


class UserCreate(BaseModel):
    """Create a user account."""

    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    password_hash: str = Field(..., max_length=255)
    role: UserRole = UserRole.CLIENT


class UserAccount(BaseModel):
    """User account stored in the database."""

    id: UUID
    email: str
    name: str
    password_hash: str
    role: UserRole = UserRole.CLIENT
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class User(BaseModel):
    """Authenticated user attached to a request."""

    id: str
    email: str
    name: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
