"""Abstract interfaces for infrastructure abstraction."""

from app.interfaces.auth_provider import IAuthProvider
from app.interfaces.client_repository import IClientRepository
from app.interfaces.message_repository import IMessageRepository
from app.interfaces.milestone_repository import IMilestoneRepository
from app.interfaces.settings_repository import IChatSettingsRepository
from app.interfaces.user_repository import IUserRepository

__all__ = [
    "IAuthProvider",
    "IClientRepository",
    "IMessageRepository",
    "IMilestoneRepository",
    "IChatSettingsRepository",
    "IUserRepository",
]
