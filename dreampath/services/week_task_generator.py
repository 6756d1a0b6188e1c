"""Batch generation of daily tasks for a range of plan weeks."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from dreampath.api.schemas.week_tasks import WeekTasksRequest
from dreampath.core.errors import InputValidationError
from dreampath.observability.tracing import trace
from dreampath.services.completion_client import CompletionClient, CompletionResult
from dreampath.services.completion_payloads import WeekTasksPayload
from dreampath.services.day_grid import build_day_grid
from dreampath.services.planning_policy import PlanningPolicy
from dreampath.services.response_parser import parse_completion
from dreampath.services.timeline import daily_minutes_for, tasks_per_day
from dreampath.services.week_tasks_prompt import build_week_tasks_prompts

logger = logging.getLogger(__name__)


@dataclass
class WeekTasksResult:
    tasks: List[Dict[str, Any]]
    completion: CompletionResult


def generate_week_tasks(
    request: WeekTasksRequest,
    client: CompletionClient,
    *,
    policy: PlanningPolicy,
    request_id: Optional[str] = None,
) -> WeekTasksResult:
    start_week = request.week_range.start_week
    end_week = request.week_range.end_week
    if end_week < start_week:
        raise InputValidationError("weekRange.endWeek must not be before weekRange.startWeek")

    daily_minutes = daily_minutes_for(request.user.daily_available_hours)
    slots = build_day_grid(start_week, end_week, daily_minutes, tasks_per_day(daily_minutes))
    prompts = build_week_tasks_prompts(request, slots, daily_minutes)

    logger.info("Generating tasks for weeks %d-%d of goal %r", start_week, end_week, request.goal.title)
    metadata = {
        "policy": policy.name,
        "start_week": start_week,
        "end_week": end_week,
        "daily_minutes": daily_minutes,
    }
    with trace("week_tasks.generate", metadata=metadata, request_id=request_id) as week_trace:
        completion = client.complete(prompts.system, prompts.user, max_tokens=policy.max_tokens, request_id=request_id)
        tasks = parse_completion(completion.content, WeekTasksPayload).tasks
        if week_trace:
            week_trace.update(metadata={**metadata, "tasks_returned": len(tasks)})

    logger.info("Tasks generated: %d", len(tasks))
    return WeekTasksResult(tasks=tasks, completion=completion)
