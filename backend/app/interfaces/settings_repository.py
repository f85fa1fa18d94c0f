"""
Chat settings repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from app.models.settings import ChatSettings, ChatSettingsUpdate


class IChatSettingsRepository(ABC):
    """Abstract interface for the singleton chat settings row."""

    @abstractmethod
    async def get(self) -> Optional[ChatSettings]:
        """Get the chat settings, or None if never configured."""
        pass

    @abstractmethod
    async def upsert(self, data: ChatSettingsUpdate) -> ChatSettings:
        """Create or replace the chat settings."""
        pass
