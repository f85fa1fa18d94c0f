"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/role values.
"""

from enum import Enum


class MilestoneStatus(str, Enum):
    """Milestone status."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    BLOCKED = "BLOCKED"


class UserRole(str, Enum):
    """Portal role of a user account."""

    ADMIN = "ADMIN"
    CLIENT = "CLIENT"


class RiskLevel(str, Enum):
    """
    Risk tier of a client, derived from overdue and stalled milestones.

    NONE = Nothing overdue or stalled
    LOW = Only stalled milestones
    MEDIUM = Exactly one overdue milestone
    HIGH = Two or more overdue, or overdue combined with stalled
    """

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ClientStatusFilter(str, Enum):
    """Status filter for the admin client table."""

    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"
    AT_RISK = "at-risk"


class ClientSort(str, Enum):
    """Sort order for the admin client table."""

    NAME = "name"
    PROGRESS = "progress"
    DUE_DATE = "due-date"
