"""Parsing and structural checks for completion-service JSON output."""
from __future__ import annotations

import logging
import math
import re
from collections import defaultdict
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError

from dreampath.core.errors import ResponseParseError, ResponseStructureError
from dreampath.services.completion_payloads import CompletionPayload
from dreampath.services.day_grid import DaySlot

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=CompletionPayload)

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")

SINGLE_TASK_SHARE = 0.8
DAILY_TOTAL_SHARE = 0.7
MAX_LOGGED_WARNINGS = 5


@dataclass(frozen=True)
class CoverageWarning:
    week_number: int
    day_of_week: int
    kind: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned)
    return _TRAILING_FENCE.sub("", cleaned)


def extract_json_object(text: str) -> str:
    """
    Return the first top-level balanced ``{...}`` span in ``text``.

    Braces inside JSON strings are ignored. Raises ResponseParseError when no object
    opens or the first one never closes.
    """
    start = text.find("{")
    if start < 0:
        raise ResponseParseError("No JSON object found in completion output")

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    raise ResponseParseError("Unbalanced JSON object in completion output")


def parse_completion(content: str, payload_type: Type[PayloadT]) -> PayloadT:
    """Strip fences and surrounding prose, then validate the JSON object as ``payload_type``."""
    span = extract_json_object(strip_code_fence(content))
    try:
        return payload_type.model_validate_json(span)
    except ValidationError as exc:
        errors = exc.errors()
        if any(error["type"] == "json_invalid" for error in errors):
            raise ResponseParseError(f"Malformed JSON in completion output: {errors[0]['msg']}") from exc
        logger.warning(
            "%s failed validation: %s",
            payload_type.__name__,
            [(error["loc"], error["msg"]) for error in errors[:MAX_LOGGED_WARNINGS]],
        )
        raise ResponseStructureError(_structure_message(errors)) from exc


def _structure_message(errors: List[Dict[str, Any]]) -> Optional[str]:
    for error in errors:
        cause = (error.get("ctx") or {}).get("error")
        if error["type"] == "value_error" and cause is not None:
            return str(cause)
    return None


def audit_day_coverage(
    tasks: Iterable[Dict[str, Any]],
    slots: List[DaySlot],
    daily_minutes: int,
) -> List[CoverageWarning]:
    """
    Check every requested slot for a plausible task allocation.

    Returns warnings instead of raising.
    """
    by_slot: Dict[Tuple[int, int], List[Dict[str, Any]]] = defaultdict(list)
    for task in tasks:
        key = (_as_int(task.get("weekNumber")), _as_int(task.get("dayOfWeek")))
        by_slot[key].append(task)

    single_task_floor = math.floor(daily_minutes * SINGLE_TASK_SHARE)
    daily_total_floor = math.floor(daily_minutes * DAILY_TOTAL_SHARE)
    warnings: List[CoverageWarning] = []
    for slot in slots:
        week, day = slot.week_number, slot.day_of_week
        day_tasks = by_slot.get((week, day), [])
        if not day_tasks:
            warnings.append(CoverageWarning(week, day, "no_tasks", f"Week {week} Day {day}: No tasks"))
            continue

        if len(day_tasks) == 1:
            minutes = _task_minutes(day_tasks[0])
            if minutes < single_task_floor:
                warnings.append(
                    CoverageWarning(
                        week,
                        day,
                        "single_task_short",
                        f"Week {week} Day {day}: Single task ({minutes}min) below {single_task_floor}min threshold",
                    )
                )

        total = sum(_task_minutes(task) for task in day_tasks)
        if total < daily_total_floor:
            warnings.append(
                CoverageWarning(
                    week,
                    day,
                    "under_budget",
                    f"Week {week} Day {day}: Total time {total}min < {daily_total_floor}min minimum",
                )
            )

    if warnings:
        logger.warning(
            "Daily coverage warnings (%d): %s",
            len(warnings),
            [warning.message for warning in warnings[:MAX_LOGGED_WARNINGS]],
        )
    return warnings


def _task_minutes(task: Dict[str, Any]) -> int:
    value = task.get("estimatedMinutes")
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    return 0


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
