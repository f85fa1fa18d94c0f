"""
Client analytics for the admin dashboard.

Builds per-client overview rows and portfolio-level summary numbers from
clients and their milestones. Overall progress is always the mean of
milestone progress values (see progress_calculator).
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional

from app.models.analytics import (
    AnalyticsSummary,
    ClientDetail,
    ClientOverview,
    UpcomingDueDate,
)
from app.models.client import ClientWithMilestones
from app.models.enums import ClientSort, ClientStatusFilter, MilestoneStatus
from app.services.progress_calculator import (
    calculate_overall_progress,
    count_completed,
    get_active_milestone,
    round_half_up,
)
from app.services.risk_detector import detect_client_risk
from app.utils.datetime_utils import ensure_utc


def _next_due_date(client: ClientWithMilestones) -> Optional[datetime]:
    due_dates = [
        ensure_utc(m.due_date)
        for m in client.milestones
        if m.due_date is not None and m.status != MilestoneStatus.COMPLETED
    ]
    return min(due_dates) if due_dates else None


def build_client_overview(client: ClientWithMilestones, now: datetime) -> ClientOverview:
    active = get_active_milestone(client.milestones)
    return ClientOverview(
        id=client.id,
        company_name=client.company_name,
        contact_name=client.contact_name,
        contact_email=client.contact_email,
        is_active=client.is_active,
        overall_progress=calculate_overall_progress(client.milestones),
        completed_milestones=count_completed(client.milestones),
        total_milestones=len(client.milestones),
        active_milestone=active.title if active else None,
        next_due_date=_next_due_date(client),
        risk=detect_client_risk(client, now=now),
    )


def build_client_detail(client: ClientWithMilestones, now: datetime) -> ClientDetail:
    return ClientDetail(
        **client.model_dump(),
        overall_progress=calculate_overall_progress(client.milestones),
        risk=detect_client_risk(client, now=now),
    )


def filter_and_sort_overviews(
    rows: Iterable[ClientOverview],
    status: ClientStatusFilter = ClientStatusFilter.ALL,
    sort: ClientSort = ClientSort.NAME,
    search: str = "",
) -> list[ClientOverview]:
    """
    Filter and order overview rows the way the admin table shows them.

    - status: all | active | inactive | at-risk
    - search: case-insensitive substring of the company name
    - sort: name (A-Z), progress (highest first), due-date (soonest first,
      clients without a due date last)
    """
    filtered = list(rows)
    if status == ClientStatusFilter.ACTIVE:
        filtered = [row for row in filtered if row.is_active]
    elif status == ClientStatusFilter.INACTIVE:
        filtered = [row for row in filtered if not row.is_active]
    elif status == ClientStatusFilter.AT_RISK:
        filtered = [row for row in filtered if row.risk.is_at_risk]

    term = search.strip().lower()
    if term:
        filtered = [row for row in filtered if term in row.company_name.lower()]

    if sort == ClientSort.PROGRESS:
        filtered.sort(key=lambda row: row.overall_progress, reverse=True)
    elif sort == ClientSort.DUE_DATE:
        filtered.sort(key=lambda row: (row.next_due_date is None, row.next_due_date or datetime.min))
    else:
        filtered.sort(key=lambda row: row.company_name.lower())
    return filtered


def build_analytics_summary(
    clients: list[ClientWithMilestones],
    now: datetime,
    window_days: int = 7,
) -> AnalyticsSummary:
    """Aggregate portfolio numbers for the admin dashboard."""
    now = ensure_utc(now)
    overviews = [build_client_overview(client, now) for client in clients]
    average = (
        round_half_up(sum(row.overall_progress for row in overviews) / len(overviews))
        if overviews
        else 0
    )

    window_end = now + timedelta(days=window_days)
    upcoming: list[UpcomingDueDate] = []
    for client in clients:
        if not client.is_active:
            continue
        for milestone in client.milestones:
            if milestone.status == MilestoneStatus.COMPLETED or milestone.due_date is None:
                continue
            due = ensure_utc(milestone.due_date)
            if now <= due <= window_end:
                upcoming.append(
                    UpcomingDueDate(
                        client_id=client.id,
                        client_name=client.company_name,
                        milestone_title=milestone.title,
                        due_date=due,
                    )
                )
    upcoming.sort(key=lambda item: item.due_date)

    return AnalyticsSummary(
        total_clients=len(clients),
        active_clients=sum(1 for client in clients if client.is_active),
        average_progress=average,
        at_risk_clients=sum(1 for row in overviews if row.risk.is_at_risk),
        upcoming_due_dates=upcoming,
    )
