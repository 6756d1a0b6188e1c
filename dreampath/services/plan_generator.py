"""LLM-backed goal plan generation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from dreampath.api.schemas.plan import PlanGenerationRequest
from dreampath.observability.metrics import log_metric
from dreampath.observability.tracing import trace
from dreampath.services.completion_client import CompletionClient, CompletionResult
from dreampath.services.completion_payloads import GeneratedPlan
from dreampath.services.day_grid import build_day_grid
from dreampath.services.plan_prompt import build_plan_prompts
from dreampath.services.planning_policy import PlanningPolicy
from dreampath.services.response_parser import CoverageWarning, audit_day_coverage, parse_completion
from dreampath.services.timeline import Timeline, compute_timeline

logger = logging.getLogger(__name__)


@dataclass
class PlanGenerationResult:
    plan: Dict[str, Any]
    timeline: Timeline
    num_milestones: int
    completion: CompletionResult
    coverage_warnings: List[CoverageWarning] = field(default_factory=list)


def generate_plan(
    request: PlanGenerationRequest,
    client: CompletionClient,
    *,
    policy: PlanningPolicy,
    request_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> PlanGenerationResult:
    """Compile the plan prompt, call the model once, and validate what comes back."""
    timeline = compute_timeline(
        request.goal.target_date,
        request.user.time_availability.daily_available_hours,
        request.goal.start_date,
        min_horizon_days=policy.min_horizon_days,
        now=now,
    )
    num_milestones = policy.milestone_count(timeline.weeks_until_target)
    slots = build_day_grid(1, timeline.weeks_until_target, timeline.daily_minutes, timeline.tasks_per_day)
    prompts = build_plan_prompts(request, timeline, slots, num_milestones)

    logger.info(
        "Generating plan for goal %r: %d days / %d weeks, %d milestones",
        request.goal.title,
        timeline.days_until_target,
        timeline.weeks_until_target,
        num_milestones,
    )
    trace_metadata = {
        "policy": policy.name,
        "category": request.goal.category,
        "experience_level": request.user.skills.experience_level,
        "days_until_target": timeline.days_until_target,
        "weeks_until_target": timeline.weeks_until_target,
        "daily_minutes": timeline.daily_minutes,
        "llm_input_text": request.goal.title[:500],
    }

    with trace("plan.generate", metadata=trace_metadata, request_id=request_id) as plan_trace:
        completion = client.complete(
            prompts.system,
            prompts.user,
            max_tokens=policy.max_tokens,
            request_id=request_id,
        )
        logger.debug("Raw plan response: %s", completion.content)
        plan = parse_completion(completion.content, GeneratedPlan)

        warnings: List[CoverageWarning] = []
        if policy.audit_coverage:
            warnings = audit_day_coverage(plan.tasks(), slots, timeline.daily_minutes)
            log_metric("plan.coverage.warnings", len(warnings), {"policy": policy.name})

        if plan_trace:
            plan_trace.update(
                metadata={
                    **trace_metadata,
                    "milestones_returned": len(plan.milestones),
                    "tasks_returned": sum(1 for _ in plan.tasks()),
                    "coverage_warnings": len(warnings),
                    "llm_output_text": plan.plan_summary[:500],
                }
            )

    return PlanGenerationResult(
        plan=plan.to_wire(),
        timeline=timeline,
        num_milestones=num_milestones,
        completion=completion,
        coverage_warnings=warnings,
    )
