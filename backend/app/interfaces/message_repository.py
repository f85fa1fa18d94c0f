"""
Message repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from app.models.message import Message, MessageCreate


class IMessageRepository(ABC):
    """Abstract interface for portal chat messages."""

    @abstractmethod
    async def list_for_user(self, user_id: UUID, include_unaddressed: bool = False) -> list[Message]:
        """
        List messages a user sent or received, oldest first.

        With include_unaddressed, messages that have no receiver are included too.
        """
        pass

    @abstractmethod
    async def create(self, sender_id: UUID, data: MessageCreate) -> Message:
        """Store a message from sender_id."""
        pass
