"""
Unit tests for milestone progress calculation.
"""

from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.models.enums import MilestoneStatus
from app.services.progress_calculator import (
    calculate_milestone_progress,
    calculate_overall_progress,
    count_completed,
    format_week_level,
    get_active_milestone,
    round_half_up,
)

START = datetime(2026, 1, 1, tzinfo=timezone.utc)
DUE = datetime(2026, 1, 11, tzinfo=timezone.utc)


class TestMilestoneProgress:
    """Tests for calculate_milestone_progress."""

    @pytest.mark.parametrize("status", [MilestoneStatus.NOT_STARTED, MilestoneStatus.BLOCKED])
    @pytest.mark.parametrize("start_date,due_date", [(None, None), (START, DUE), (START, None)])
    def test_not_started_and_blocked_are_zero(self, status, start_date, due_date):
        assert calculate_milestone_progress(status, start_date, due_date, now=START) == 0

    @pytest.mark.parametrize("start_date,due_date", [(None, None), (START, DUE), (DUE, START)])
    def test_completed_is_hundred(self, start_date, due_date):
        assert calculate_milestone_progress(MilestoneStatus.COMPLETED, start_date, due_date, now=START) == 100

    def test_halfway_through_interval(self):
        now = datetime(2026, 1, 6, tzinfo=timezone.utc)
        assert calculate_milestone_progress(MilestoneStatus.IN_PROGRESS, START, DUE, now=now) == 50

    def test_partial_days_are_truncated(self):
        # 5 days and 23 hours elapsed still counts as 5 days
        now = datetime(2026, 1, 6, 23, 0, tzinfo=timezone.utc)
        assert calculate_milestone_progress(MilestoneStatus.IN_PROGRESS, START, DUE, now=now) == 50

    def test_same_start_and_due_is_placeholder(self):
        assert calculate_milestone_progress(MilestoneStatus.IN_PROGRESS, START, START, now=DUE) == 50

    def test_due_before_start_is_placeholder(self):
        assert calculate_milestone_progress(MilestoneStatus.IN_PROGRESS, DUE, START, now=DUE) == 50

    def test_past_due_clamps_to_99(self):
        now = DUE + timedelta(days=30)
        assert calculate_milestone_progress(MilestoneStatus.IN_PROGRESS, START, DUE, now=now) == 99

    def test_exactly_on_due_date_is_99(self):
        assert calculate_milestone_progress(MilestoneStatus.IN_PROGRESS, START, DUE, now=DUE) == 99

    def test_before_start_clamps_to_zero(self):
        now = START - timedelta(days=3)
        assert calculate_milestone_progress(MilestoneStatus.IN_PROGRESS, START, DUE, now=now) == 0

    @pytest.mark.parametrize("start_date,due_date", [(None, None), (START, None), (None, DUE)])
    def test_missing_dates_is_placeholder(self, start_date, due_date):
        assert calculate_milestone_progress(MilestoneStatus.IN_PROGRESS, start_date, due_date, now=START) == 50

    def test_half_rounds_up(self):
        # 1 of 8 days -> 12.5% -> 13
        start = datetime(2026, 3, 1, tzinfo=timezone.utc)
        due = start + timedelta(days=8)
        now = start + timedelta(days=1)
        assert calculate_milestone_progress(MilestoneStatus.IN_PROGRESS, start, due, now=now) == 13

    def test_naive_and_date_inputs(self):
        now = datetime(2026, 1, 6)
        assert calculate_milestone_progress(
            MilestoneStatus.IN_PROGRESS, date(2026, 1, 1), date(2026, 1, 11), now=now
        ) == 50

    def test_accepts_raw_status_value(self):
        assert calculate_milestone_progress("COMPLETED", None, None) == 100

    def test_defaults_to_current_time(self):
        start = datetime.now(timezone.utc) - timedelta(days=5)
        due = start + timedelta(days=10)
        assert calculate_milestone_progress(MilestoneStatus.IN_PROGRESS, start, due) == 50


class TestOverallProgress:
    """Tests for calculate_overall_progress."""

    def test_empty_is_zero(self):
        assert calculate_overall_progress([]) == 0

    def test_mean_of_progress(self):
        milestones = [SimpleNamespace(progress=100), SimpleNamespace(progress=0)]
        assert calculate_overall_progress(milestones) == 50

    def test_mean_is_rounded(self):
        milestones = [SimpleNamespace(progress=p) for p in (100, 50, 0, 0, 0, 0)]
        # 150 / 6 = 25
        assert calculate_overall_progress(milestones) == 25
        milestones = [SimpleNamespace(progress=p) for p in (33, 34)]
        # 33.5 rounds up
        assert calculate_overall_progress(milestones) == 34


class TestHelpers:
    def test_round_half_up(self):
        assert round_half_up(50.5) == 51
        assert round_half_up(49.4) == 49
        assert round_half_up(-2.5) == -2

    def test_active_milestone_prefers_in_progress(self):
        milestones = [
            SimpleNamespace(title="A", status=MilestoneStatus.COMPLETED),
            SimpleNamespace(title="B", status=MilestoneStatus.NOT_STARTED),
            SimpleNamespace(title="C", status=MilestoneStatus.IN_PROGRESS),
        ]
        assert get_active_milestone(milestones).title == "C"

    def test_active_milestone_falls_back_to_not_started(self):
        milestones = [
            SimpleNamespace(title="A", status=MilestoneStatus.COMPLETED),
            SimpleNamespace(title="B", status=MilestoneStatus.BLOCKED),
            SimpleNamespace(title="C", status=MilestoneStatus.NOT_STARTED),
        ]
        assert get_active_milestone(milestones).title == "C"

    def test_active_milestone_none_when_all_done_or_blocked(self):
        milestones = [
            SimpleNamespace(title="A", status=MilestoneStatus.COMPLETED),
            SimpleNamespace(title="B", status=MilestoneStatus.BLOCKED),
        ]
        assert get_active_milestone(milestones) is None

    def test_count_completed(self):
        milestones = [
            SimpleNamespace(status=MilestoneStatus.COMPLETED),
            SimpleNamespace(status=MilestoneStatus.IN_PROGRESS),
            SimpleNamespace(status=MilestoneStatus.COMPLETED),
        ]
        assert count_completed(milestones) == 2

    def test_format_week_level(self):
        assert format_week_level(date(2026, 1, 5)) == "Week of Jan 5, 2026"
        assert format_week_level(datetime(2026, 11, 15, 9, 30)) == "Week of Nov 15, 2026"
        assert format_week_level(None) == ""
