"""
Milestone repository interface.

Defines the contract for milestone data operations.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from app.models.milestone import Milestone, MilestonePatch


class IMilestoneRepository(ABC):
    """Interface for milestone repository operations."""

    @abstractmethod
    async def list_by_client(self, client_id: UUID) -> list[Milestone]:
        """List a client's milestones ordered by position."""
        pass

    @abstractmethod
    async def apply_patches(self, client_id: UUID, patches: list[MilestonePatch]) -> list[Milestone]:
        """Persist resolved milestone values in one transaction. Returns the client's milestones."""
        pass
