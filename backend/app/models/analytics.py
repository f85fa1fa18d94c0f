"""
Progress, risk and analytics read models.

These are computed on demand from milestone data and never persisted.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.client import ClientWithMilestones
from app.models.enums import RiskLevel
from app.models.milestone import Milestone


class RiskIndicators(BaseModel):
    """Risk assessment for a single client."""

    is_at_risk: bool = False
    risk_level: RiskLevel = RiskLevel.NONE
    reasons: list[str] = Field(default_factory=list)


class ClientOverview(BaseModel):
    """One row of the admin client analytics table."""

    id: UUID
    company_name: str
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    is_active: bool
    overall_progress: int = Field(..., ge=0, le=100)
    completed_milestones: int
    total_milestones: int
    active_milestone: Optional[str] = None
    next_due_date: Optional[datetime] = None
    risk: RiskIndicators


class UpcomingDueDate(BaseModel):
    """A milestone due soon, for the admin summary."""

    client_id: UUID
    client_name: str
    milestone_title: str
    due_date: datetime


class AnalyticsSummary(BaseModel):
    """Aggregate numbers for the admin dashboard."""

    total_clients: int
    active_clients: int
    average_progress: int = Field(..., ge=0, le=100)
    at_risk_clients: int
    upcoming_due_dates: list[UpcomingDueDate] = Field(default_factory=list)


class ClientDetail(ClientWithMilestones):
    """Client with milestones and computed progress/risk."""

    overall_progress: int = Field(..., ge=0, le=100)
    risk: RiskIndicators


class ClientProgress(BaseModel):
    """A client's own view of their engagement progress."""

    client_id: UUID
    company_name: str
    overall_progress: int = Field(..., ge=0, le=100)
    completed_milestones: int
    total_milestones: int
    active_milestone: Optional[Milestone] = None
    # Week-level due date of the active milestone, e.g. "Week of Jan 15, 2026"
    active_due_week: str = ""
    milestones: list[Milestone] = Field(default_factory=list)
