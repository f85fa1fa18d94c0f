"""Pydantic models (schemas) for the application."""

from app.models.enums import (
    ClientSort,
    ClientStatusFilter,
    MilestoneStatus,
    RiskLevel,
    UserRole,
)
from app.models.milestone import (
    Milestone,
    MilestoneBatchUpdate,
    MilestoneCreate,
    MilestoneNote,
    MilestonePatch,
    MilestoneUpdateItem,
)
from app.models.client import (
    Client,
    ClientCreate,
    ClientProfileFields,
    ClientUpdate,
    ClientWithMilestones,
)
from app.models.user import User, UserAccount, UserCreate
from app.models.settings import ChatLinks, ChatSettings, ChatSettingsUpdate
from app.models.message import Message, MessageCreate, MessageSender
from app.models.analytics import (
    AnalyticsSummary,
    ClientDetail,
    ClientOverview,
    ClientProgress,
    RiskIndicators,
    UpcomingDueDate,
)

__all__ = [
    # Enums
    "MilestoneStatus",
    "UserRole",
    "RiskLevel",
    "ClientStatusFilter",
    "ClientSort",
    # Milestone
    "Milestone",
    "MilestoneCreate",
    "MilestoneNote",
    "MilestonePatch",
    "MilestoneUpdateItem",
    "MilestoneBatchUpdate",
    # Client
    "Client",
    "ClientCreate",
    "ClientUpdate",
    "ClientProfileFields",
    "ClientWithMilestones",
    # User
    "User",
    "UserAccount",
    "UserCreate",
    # Settings
    "ChatSettings",
    "ChatSettingsUpdate",
    "ChatLinks",
    # Message
    "Message",
    "MessageCreate",
    "MessageSender",
    # Analytics
    "RiskIndicators",
    "ClientOverview",
    "ClientDetail",
    "ClientProgress",
    "AnalyticsSummary",
    "UpcomingDueDate",
]
