"""
Auth provider interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.models.user import User


class IAuthProvider(ABC):
    """Abstract interface for session token verification."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """Verify a session token and return the user it belongs to."""
        pass
