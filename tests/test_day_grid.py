from __future__ import annotations

import pytest

from dreampath.services.day_grid import build_day_grid, render_day_grid


@pytest.mark.parametrize("weeks", [1, 2, 5, 12])
def test_one_slot_per_week_day(weeks: int) -> None:
    slots = build_day_grid(1, weeks, 60, 2)

    assert len(slots) == 7 * weeks
    assert [(slot.week_number, slot.day_of_week) for slot in slots] == [
        (week, day) for week in range(1, weeks + 1) for day in range(1, 8)
    ]


def test_grid_spans_monday_to_sunday() -> None:
    slots = build_day_grid(1, 1, 60, 2)

    assert slots[0].day_name == "Monday"
    assert slots[-1].day_name == "Sunday"


def test_rendered_grid_lists_every_slot_with_budget() -> None:
    slots = build_day_grid(3, 4, 120, 3)
    text = render_day_grid(slots)

    assert "WEEK 3:" in text and "WEEK 4:" in text
    assert "WEEK 1:" not in text
    slot_lines = [line for line in text.splitlines() if "dayOfWeek" in line]
    assert len(slot_lines) == 14
    assert "Wednesday (weekNumber: 4, dayOfWeek: 3): need 3+ tasks totaling 96-120 min" in text
