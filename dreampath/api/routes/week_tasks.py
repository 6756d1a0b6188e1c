"""Batch week-task generation endpoint."""
from __future__ import annotations

import logging
from time import perf_counter

from fastapi import APIRouter, Depends, Request

from dreampath.api.errors import error_response
from dreampath.api.schemas.common import UsagePayload
from dreampath.api.schemas.week_tasks import WeekTasksRequest, WeekTasksResponse
from dreampath.observability.metrics import record_request_metrics
from dreampath.services.completion_client import CompletionClient, get_completion_client
from dreampath.services.planning_policy import WEEK_TASKS_POLICY
from dreampath.services.week_task_generator import generate_week_tasks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["plans"])


@router.post("/generate-week-tasks", response_model=WeekTasksResponse)
def generate_week_tasks_endpoint(
    payload: WeekTasksRequest,
    request: Request,
    client: CompletionClient = Depends(get_completion_client),
):
    request_id = getattr(request.state, "request_id", None)
    start = perf_counter()
    success = False
    try:
        result = generate_week_tasks(payload, client, policy=WEEK_TASKS_POLICY, request_id=request_id)
        success = True
    except Exception as exc:
        logger.exception(
            "Week task generation failed for weeks %d-%d",
            payload.week_range.start_week,
            payload.week_range.end_week,
        )
        return error_response(exc, policy=WEEK_TASKS_POLICY)
    finally:
        record_request_metrics("week_tasks.generate", success, start)

    return WeekTasksResponse(
        tasks=result.tasks,
        week_range=payload.week_range,
        usage=UsagePayload.from_completion(result.completion),
    )
