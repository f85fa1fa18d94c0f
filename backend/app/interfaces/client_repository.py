"""
Client repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from app.models.client import ClientProfileFields, ClientUpdate, ClientWithMilestones
from app.models.milestone import MilestoneCreate
from app.models.user import UserCreate


class IClientRepository(ABC):
    """Abstract interface for client persistence."""

    @abstractmethod
    async def create_with_account(
        self,
        user: UserCreate,
        profile: ClientProfileFields,
        milestones: list[MilestoneCreate],
    ) -> ClientWithMilestones:
        """Create the user account, client profile and milestones atomically."""
        pass

    @abstractmethod
    async def get(self, client_id: UUID) -> Optional[ClientWithMilestones]:
        """Get a client with its milestones."""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[ClientWithMilestones]:
        """Get the client profile owned by a user account."""
        pass

    @abstractmethod
    async def list_with_milestones(self) -> list[ClientWithMilestones]:
        """List all clients with milestones, newest first."""
        pass

    @abstractmethod
    async def update(self, client_id: UUID, update: ClientUpdate) -> ClientWithMilestones:
        """Update profile fields and the contact name atomically."""
        pass

    @abstractmethod
    async def toggle_active(self, client_id: UUID) -> bool:
        """Flip is_active. Returns the new value."""
        pass
