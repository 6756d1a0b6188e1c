"""Day grid: the (week, day) checklist sent to the model and reused by the coverage audit."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
DAY_BUDGET_FLOOR = 0.8


@dataclass(frozen=True)
class DaySlot:
    week_number: int
    day_of_week: int
    min_tasks: int
    daily_minutes: int

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week - 1]

    @property
    def min_minutes(self) -> int:
        return math.floor(self.daily_minutes * DAY_BUDGET_FLOOR)

    def describe(self) -> str:
        return (
            f"  - {self.day_name} (weekNumber: {self.week_number}, dayOfWeek: {self.day_of_week}): "
            f"need {self.min_tasks}+ tasks totaling {self.min_minutes}-{self.daily_minutes} min"
        )


def build_day_grid(start_week: int, end_week: int, daily_minutes: int, min_tasks: int) -> List[DaySlot]:
    """Return every slot from ``start_week`` Monday through ``end_week`` Sunday."""
    return [
        DaySlot(week_number=week, day_of_week=day, min_tasks=min_tasks, daily_minutes=daily_minutes)
        for week in range(start_week, end_week + 1)
        for day in range(1, 8)
    ]


def render_day_grid(slots: List[DaySlot]) -> str:
    lines: List[str] = []
    current_week = None
    for slot in slots:
        if slot.week_number != current_week:
            current_week = slot.week_number
            lines.append(f"\nWEEK {current_week}:")
        lines.append(slot.describe())
    return "\n".join(lines)
