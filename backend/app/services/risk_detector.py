"""
Client risk detection.

Flags clients whose milestones are overdue or stalled and assigns a risk tier.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence, Union

from app.models.analytics import RiskIndicators
from app.models.enums import MilestoneStatus, RiskLevel
from app.utils.datetime_utils import DateLike, difference_in_days, ensure_utc, now_utc

STALLED_AFTER_DAYS = 14
STALLED_PROGRESS_THRESHOLD = 50


class MilestoneForRisk(Protocol):
    status: MilestoneStatus
    start_date: Optional[DateLike]
    due_date: Optional[DateLike]
    progress: int


class ClientForRisk(Protocol):
    milestones: Sequence[MilestoneForRisk]


def is_overdue(milestone: MilestoneForRisk, now: datetime) -> bool:
    """Not completed and the due date has passed."""
    if milestone.status == MilestoneStatus.COMPLETED or milestone.due_date is None:
        return False
    return ensure_utc(milestone.due_date) < now


def is_stalled(milestone: MilestoneForRisk, now: datetime) -> bool:
    """In progress for 14+ days with less than 50% progress."""
    if milestone.status != MilestoneStatus.IN_PROGRESS or milestone.start_date is None:
        return False
    days_since_start = difference_in_days(now, milestone.start_date)
    return days_since_start >= STALLED_AFTER_DAYS and milestone.progress < STALLED_PROGRESS_THRESHOLD


def classify_risk(overdue_count: int, stalled_count: int) -> RiskLevel:
    if overdue_count == 0 and stalled_count == 0:
        return RiskLevel.NONE
    if overdue_count == 0:
        return RiskLevel.LOW
    if overdue_count == 1 and stalled_count == 0:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def detect_client_risk(
    client: Union[ClientForRisk, Sequence[MilestoneForRisk]],
    now: Optional[datetime] = None,
) -> RiskIndicators:
    """
    Assess a client's risk from its milestones.

    Args:
        client: Object exposing ``milestones``, or the milestone list itself
        now: Reference time, defaults to the current UTC time

    Returns:
        RiskIndicators with the tier and one reason per non-zero category
    """
    milestones = getattr(client, "milestones", client)
    reference = ensure_utc(now) if now is not None else now_utc()

    overdue_count = sum(1 for m in milestones if is_overdue(m, reference))
    stalled_count = sum(1 for m in milestones if is_stalled(m, reference))

    reasons: list[str] = []
    if overdue_count > 0:
        reasons.append(f"{overdue_count} overdue milestone(s)")
    if stalled_count > 0:
        reasons.append(f"{stalled_count} stalled milestone(s)")

    risk_level = classify_risk(overdue_count, stalled_count)
    return RiskIndicators(
        is_at_risk=risk_level != RiskLevel.NONE,
        risk_level=risk_level,
        reasons=reasons,
    )
