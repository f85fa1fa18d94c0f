"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class PortalError(Exception):
    """Base exception for the client portal."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(PortalError):
    """Resource not found."""

    pass


class DuplicateError(PortalError):
    """Duplicate resource detected."""

    pass


class InfrastructureError(PortalError):
    """Infrastructure-related error (DB, external services, etc.)."""

    pass
