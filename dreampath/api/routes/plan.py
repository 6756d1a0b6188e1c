"""Goal plan generation endpoints."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from time import perf_counter

from fastapi import APIRouter, Depends, Request

from dreampath.api.errors import error_response
from dreampath.api.schemas.common import UsagePayload
from dreampath.api.schemas.plan import (
    CoverageWarningPayload,
    GeneratePlanResponse,
    PlanGenerationRequest,
    PlanMetadata,
    SimplePlanRequest,
    SimplePlanResponse,
)
from dreampath.observability.metrics import record_request_metrics
from dreampath.services.completion_client import CompletionClient, get_completion_client
from dreampath.services.plan_generator import generate_plan
from dreampath.services.planning_policy import SIMPLE_PLAN_POLICY, STRICT_PLAN_POLICY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["plans"])


@router.post("/generate-plan", response_model=GeneratePlanResponse)
def generate_plan_endpoint(
    payload: PlanGenerationRequest,
    request: Request,
    client: CompletionClient = Depends(get_completion_client),
):
    """Generate a milestone plan with day-by-day tasks and a coverage audit."""
    request_id = getattr(request.state, "request_id", None)
    start = perf_counter()
    success = False
    try:
        result = generate_plan(payload, client, policy=STRICT_PLAN_POLICY, request_id=request_id)
        success = True
    except Exception as exc:
        logger.exception("Plan generation failed for goal %r", payload.goal.title)
        return error_response(exc, policy=STRICT_PLAN_POLICY)
    finally:
        record_request_metrics("plan.generate", success, start)

    return GeneratePlanResponse(
        plan=result.plan,
        metadata=PlanMetadata(
            generated_at=datetime.now(timezone.utc),
            days_until_target=result.timeline.days_until_target,
            weeks_until_target=result.timeline.weeks_until_target,
            num_milestones=result.num_milestones,
            model=result.completion.model,
            coverage_warnings=[CoverageWarningPayload(**warning.to_dict()) for warning in result.coverage_warnings],
        ),
        usage=UsagePayload.from_completion(result.completion),
    )


@router.post("/generate-plan/simple", response_model=SimplePlanResponse)
def generate_simple_plan_endpoint(
    payload: SimplePlanRequest,
    request: Request,
    client: CompletionClient = Depends(get_completion_client),
):
    """Generate a plan from a bare goal statement and target date."""
    request_id = getattr(request.state, "request_id", None)
    start = perf_counter()
    success = False
    try:
        result = generate_plan(payload.to_plan_request(), client, policy=SIMPLE_PLAN_POLICY, request_id=request_id)
        success = True
    except Exception as exc:
        logger.exception("Simple plan generation failed for goal %r", payload.goal)
        return error_response(exc, policy=SIMPLE_PLAN_POLICY)
    finally:
        record_request_metrics("plan.generate_simple", success, start)

    return SimplePlanResponse(plan=result.plan, usage=UsagePayload.from_completion(result.completion))
