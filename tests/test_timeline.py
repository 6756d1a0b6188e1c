from __future__ import annotations

from datetime import datetime, timezone

import pytest

from dreampath.core.errors import InputValidationError
from dreampath.services.planning_policy import SIMPLE_PLAN_POLICY, STRICT_PLAN_POLICY
from dreampath.services.timeline import compute_timeline, tasks_per_day


def test_exactly_seven_days_is_accepted() -> None:
    timeline = compute_timeline("2026-03-08", 1, "2026-03-01")

    assert timeline.days_until_target == 7
    assert timeline.weeks_until_target == 1


def test_shorter_horizon_is_rejected() -> None:
    with pytest.raises(InputValidationError) as excinfo:
        compute_timeline("2026-03-07", 1, "2026-03-01")

    assert excinfo.value.status_code == 400
    assert "at least 1 week" in str(excinfo.value)


def test_partial_day_counts_as_full_day() -> None:
    now = datetime(2026, 3, 1, 15, 30, tzinfo=timezone.utc)
    timeline = compute_timeline("2026-03-31", 1, now=now)

    assert timeline.days_until_target == 30
    assert timeline.weeks_until_target == 5


def test_start_defaults_to_now() -> None:
    now = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
    timeline = compute_timeline("2026-03-15T09:00:00Z", 2, now=now)

    assert timeline.start == now
    assert timeline.days_until_target == 14


def test_daily_minutes_from_fractional_hours() -> None:
    timeline = compute_timeline("2026-04-01", 1.5, "2026-03-01")

    assert timeline.daily_minutes == 90
    assert timeline.tasks_per_day == 3


def test_invalid_date_is_a_validation_error() -> None:
    with pytest.raises(InputValidationError):
        compute_timeline("next tuesday", 1, "2026-03-01")


@pytest.mark.parametrize("minutes, expected", [(30, 2), (60, 2), (120, 3), (180, 5), (0, 2)])
def test_tasks_per_day_has_floor_of_two(minutes: int, expected: int) -> None:
    assert tasks_per_day(minutes) == expected


@pytest.mark.parametrize("weeks, expected", [(1, 3), (3, 3), (5, 5), (8, 8), (20, 8)])
def test_milestone_count_is_clamped(weeks: int, expected: int) -> None:
    assert STRICT_PLAN_POLICY.milestone_count(weeks) == expected
    assert SIMPLE_PLAN_POLICY.milestone_count(weeks) == expected
