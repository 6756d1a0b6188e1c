"""Planning-horizon arithmetic over request dates and daily hours."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone

from dreampath.core.errors import InputValidationError

SECONDS_PER_DAY = 24 * 60 * 60
AVERAGE_TASK_MINUTES = 40
MIN_TASKS_PER_DAY = 2


@dataclass(frozen=True)
class Timeline:
    start: datetime
    target: datetime
    days_until_target: int
    weeks_until_target: int
    daily_minutes: int

    @property
    def tasks_per_day(self) -> int:
        return tasks_per_day(self.daily_minutes)


def parse_request_datetime(value: str, field_name: str) -> datetime:
    """Parse an ISO date or datetime; naive values are read as UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (AttributeError, ValueError) as exc:
        raise InputValidationError(f"Invalid date for {field_name}: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def daily_minutes_for(hours: float) -> int:
    return int(round(hours * 60))


def tasks_per_day(daily_minutes: int) -> int:
    """Minimum number of tasks a day needs to fill its budget with 40-minute blocks."""
    return max(MIN_TASKS_PER_DAY, math.ceil(daily_minutes / AVERAGE_TASK_MINUTES))


def compute_timeline(
    target_date: str,
    daily_hours: float,
    start_date: str | None = None,
    *,
    min_horizon_days: int = 7,
    now: datetime | None = None,
) -> Timeline:
    """
    Derive the horizon scalars for a plan request.

    Partial days count as full days. Raises InputValidationError when the horizon is
    shorter than ``min_horizon_days``.
    """
    if daily_hours is None or daily_hours <= 0:
        raise InputValidationError("Daily available hours must be greater than zero")

    start = parse_request_datetime(start_date, "startDate") if start_date else (now or datetime.now(timezone.utc))
    target = parse_request_datetime(target_date, "targetDate")

    days_until_target = math.ceil((target - start).total_seconds() / SECONDS_PER_DAY)
    if days_until_target < min_horizon_days:
        raise InputValidationError("Target date must be at least 1 week in the future")

    return Timeline(
        start=start,
        target=target,
        days_until_target=days_until_target,
        weeks_until_target=math.ceil(days_until_target / 7),
        daily_minutes=daily_minutes_for(daily_hours),
    )
