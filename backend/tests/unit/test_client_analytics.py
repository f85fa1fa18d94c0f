"""
Unit tests for admin client analytics.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from app.models.client import ClientWithMilestones
from app.models.enums import ClientSort, ClientStatusFilter, MilestoneStatus, RiskLevel
from app.models.milestone import Milestone
from app.services.client_analytics import (
    build_analytics_summary,
    build_client_detail,
    build_client_overview,
    filter_and_sort_overviews,
)

NOW = datetime(2026, 4, 1, 12, 0, tzinfo=timezone.utc)


def _milestone(client_id, order, status=MilestoneStatus.NOT_STARTED, progress=0, title=None, **kwargs) -> Milestone:
    return Milestone(
        id=uuid4(),
        client_id=client_id,
        title=title or f"Milestone {order}",
        order=order,
        status=status,
        progress=progress,
        created_at=NOW - timedelta(days=60),
        updated_at=NOW - timedelta(days=1),
        **kwargs,
    )


def _client(company_name, milestone_fields=(), is_active=True) -> ClientWithMilestones:
    client_id = uuid4()
    milestones = [
        _milestone(client_id, index + 1, **fields)
        for index, fields in enumerate(milestone_fields)
    ]
    return ClientWithMilestones(
        id=client_id,
        user_id=uuid4(),
        company_name=company_name,
        is_active=is_active,
        contact_name="Sam Lee",
        contact_email=f"{company_name.lower().replace(' ', '')}@example.com",
        created_at=NOW - timedelta(days=60),
        updated_at=NOW - timedelta(days=1),
        milestones=milestones,
    )


class TestClientOverview:
    def test_overview_fields(self):
        client = _client(
            "Acme Corp",
            [
                {"status": MilestoneStatus.COMPLETED, "progress": 100},
                {
                    "status": MilestoneStatus.IN_PROGRESS,
                    "progress": 40,
                    "title": "Ad Account Setup",
                    "due_date": NOW + timedelta(days=3),
                },
                {"due_date": NOW + timedelta(days=10)},
            ],
        )
        row = build_client_overview(client, NOW)

        # (100 + 40 + 0) / 3 = 46.67
        assert row.overall_progress == 47
        assert row.completed_milestones == 1
        assert row.total_milestones == 3
        assert row.active_milestone == "Ad Account Setup"
        assert row.next_due_date == NOW + timedelta(days=3)
        assert row.risk.risk_level == RiskLevel.NONE

    def test_completed_due_dates_are_skipped(self):
        client = _client(
            "Acme Corp",
            [
                {"status": MilestoneStatus.COMPLETED, "progress": 100, "due_date": NOW - timedelta(days=5)},
                {"due_date": NOW + timedelta(days=9)},
            ],
        )
        assert build_client_overview(client, NOW).next_due_date == NOW + timedelta(days=9)

    def test_client_without_milestones(self):
        row = build_client_overview(_client("Empty Co"), NOW)
        assert row.overall_progress == 0
        assert row.active_milestone is None
        assert row.next_due_date is None

    def test_detail_carries_milestones_and_risk(self):
        client = _client(
            "Late Co",
            [{"status": MilestoneStatus.IN_PROGRESS, "progress": 99, "due_date": NOW - timedelta(days=1)}],
        )
        detail = build_client_detail(client, NOW)
        assert detail.id == client.id
        assert len(detail.milestones) == 1
        assert detail.overall_progress == 99
        assert detail.risk.risk_level == RiskLevel.MEDIUM


class TestFilterAndSort:
    def _rows(self):
        overdue = {"status": MilestoneStatus.IN_PROGRESS, "progress": 80, "due_date": NOW - timedelta(days=2)}
        clients = [
            _client("beta Labs", [{"status": MilestoneStatus.COMPLETED, "progress": 100, "due_date": NOW}]),
            _client("Alpha Inc", [overdue]),
            _client("Gamma LLC", [{"due_date": NOW + timedelta(days=4)}], is_active=False),
        ]
        return [build_client_overview(client, NOW) for client in clients]

    def test_default_sorts_by_name_case_insensitive(self):
        rows = filter_and_sort_overviews(self._rows())
        assert [r.company_name for r in rows] == ["Alpha Inc", "beta Labs", "Gamma LLC"]

    def test_sort_by_progress_descending(self):
        rows = filter_and_sort_overviews(self._rows(), sort=ClientSort.PROGRESS)
        assert [r.company_name for r in rows] == ["beta Labs", "Alpha Inc", "Gamma LLC"]

    def test_sort_by_due_date_puts_missing_last(self):
        rows = filter_and_sort_overviews(self._rows(), sort=ClientSort.DUE_DATE)
        assert [r.company_name for r in rows] == ["Alpha Inc", "Gamma LLC", "beta Labs"]

    def test_status_filters(self):
        rows = self._rows()
        assert [r.company_name for r in filter_and_sort_overviews(rows, ClientStatusFilter.ACTIVE)] == [
            "Alpha Inc",
            "beta Labs",
        ]
        assert [r.company_name for r in filter_and_sort_overviews(rows, ClientStatusFilter.INACTIVE)] == [
            "Gamma LLC"
        ]
        assert [r.company_name for r in filter_and_sort_overviews(rows, ClientStatusFilter.AT_RISK)] == [
            "Alpha Inc"
        ]

    def test_search_is_case_insensitive_substring(self):
        rows = filter_and_sort_overviews(self._rows(), search="  LAB ")
        assert [r.company_name for r in rows] == ["beta Labs"]


class TestAnalyticsSummary:
    def test_empty_portfolio(self):
        summary = build_analytics_summary([], NOW)
        assert summary.total_clients == 0
        assert summary.active_clients == 0
        assert summary.average_progress == 0
        assert summary.at_risk_clients == 0
        assert summary.upcoming_due_dates == []

    def test_summary_numbers(self):
        clients = [
            _client(
                "Acme Corp",
                [
                    {"status": MilestoneStatus.COMPLETED, "progress": 100, "due_date": NOW + timedelta(days=1)},
                    {"title": "Launch", "due_date": NOW + timedelta(days=6)},
                    {"title": "Campaign Build", "due_date": NOW + timedelta(days=2)},
                    {"title": "Later", "due_date": NOW + timedelta(days=8)},
                ],
            ),
            _client(
                "Late Co",
                [{"status": MilestoneStatus.IN_PROGRESS, "progress": 60, "due_date": NOW - timedelta(days=1)}],
            ),
            _client(
                "Paused Ltd",
                [{"title": "Hidden", "due_date": NOW + timedelta(days=1)}],
                is_active=False,
            ),
        ]

        summary = build_analytics_summary(clients, NOW, window_days=7)

        assert summary.total_clients == 3
        assert summary.active_clients == 2
        # Client means are 25, 60 and 0
        assert summary.average_progress == 28
        assert summary.at_risk_clients == 1
        assert [item.milestone_title for item in summary.upcoming_due_dates] == ["Campaign Build", "Launch"]
        assert summary.upcoming_due_dates[0].client_name == "Acme Corp"

    def test_window_is_inclusive(self):
        clients = [_client("Acme Corp", [{"title": "Edge", "due_date": NOW + timedelta(days=7)}])]
        summary = build_analytics_summary(clients, NOW, window_days=7)
        assert [item.milestone_title for item in summary.upcoming_due_dates] == ["Edge"]
