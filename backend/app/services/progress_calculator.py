"""
Milestone progress calculation.

Derives a milestone's completion percentage from its status and dates and
aggregates percentages into an overall client score.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, Protocol, Sequence

from app.models.enums import MilestoneStatus
from app.utils.datetime_utils import DateLike, difference_in_days, ensure_utc, now_utc

PLACEHOLDER_PROGRESS = 50
MAX_TIME_BASED_PROGRESS = 99


class HasProgress(Protocol):
    progress: int


class HasStatus(Protocol):
    status: MilestoneStatus


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 rounded up (round() would give 50 for 50.5)."""
    return math.floor(value + 0.5)


def calculate_milestone_progress(
    status: MilestoneStatus,
    start_date: Optional[DateLike],
    due_date: Optional[DateLike],
    now: Optional[datetime] = None,
) -> int:
    """
    Calculate a milestone's progress percentage.

    COMPLETED is always 100 and NOT_STARTED/BLOCKED are always 0. An
    IN_PROGRESS milestone with both dates is scored by elapsed time and
    capped at 99, so only an explicit completion reaches 100. Missing dates
    or a due date on/before the start date give the 50% placeholder.

    Args:
        status: Milestone status
        start_date: When work started (optional)
        due_date: Target due date (optional)
        now: Reference time, defaults to the current UTC time

    Returns:
        Integer percentage in [0, 100]
    """
    status = MilestoneStatus(status)
    if status == MilestoneStatus.COMPLETED:
        return 100

    if status in (MilestoneStatus.NOT_STARTED, MilestoneStatus.BLOCKED):
        return 0

    if start_date is None or due_date is None:
        return PLACEHOLDER_PROGRESS

    reference = ensure_utc(now) if now is not None else now_utc()
    total_days = difference_in_days(due_date, start_date)
    elapsed_days = difference_in_days(reference, start_date)

    if total_days <= 0:
        return PLACEHOLDER_PROGRESS

    progress = round_half_up(elapsed_days / total_days * 100)
    return min(max(progress, 0), MAX_TIME_BASED_PROGRESS)


def calculate_overall_progress(milestones: Sequence[HasProgress]) -> int:
    """Unweighted mean of milestone progress values; 0 for an empty list."""
    if not milestones:
        return 0
    total = sum(milestone.progress for milestone in milestones)
    return round_half_up(total / len(milestones))


def count_completed(milestones: Sequence[HasStatus]) -> int:
    return sum(1 for m in milestones if m.status == MilestoneStatus.COMPLETED)


def get_active_milestone(milestones: Sequence[HasStatus]):
    """
    Return the milestone currently being worked on.

    The first IN_PROGRESS milestone wins; otherwise the first NOT_STARTED one.
    Returns None when everything is completed or blocked. Expects milestones
    sorted by order.
    """
    for milestone in milestones:
        if milestone.status == MilestoneStatus.IN_PROGRESS:
            return milestone
    for milestone in milestones:
        if milestone.status == MilestoneStatus.NOT_STARTED:
            return milestone
    return None


def format_week_level(value: Optional[DateLike]) -> str:
    """Format a date with week-level precision, e.g. "Week of Jan 15, 2026"."""
    if value is None:
        return ""
    return f"Week of {value.strftime('%b')} {value.day}, {value.year}"
