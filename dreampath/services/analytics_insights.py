"""LLM-written weekly insights over a user's progress statistics."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dreampath.api.schemas.analytics import AnalyticsInsightsRequest
from dreampath.observability.tracing import trace
from dreampath.services.analytics_prompt import build_analytics_prompts
from dreampath.services.completion_client import CompletionClient, CompletionResult
from dreampath.services.completion_payloads import InsightsPayload
from dreampath.services.planning_policy import PlanningPolicy
from dreampath.services.response_parser import parse_completion

logger = logging.getLogger(__name__)


@dataclass
class InsightsResult:
    insights: Dict[str, Any]
    completion: CompletionResult
    generated_at: datetime


def generate_insights(
    request: AnalyticsInsightsRequest,
    client: CompletionClient,
    *,
    policy: PlanningPolicy,
    request_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> InsightsResult:
    now = now or datetime.now(timezone.utc)
    prompts = build_analytics_prompts(request, now=now)
    logger.info("Generating insights for %d goals", len(request.goals))

    metadata = {
        "policy": policy.name,
        "goals": len(request.goals),
        "streak": request.stats.streak,
        "overall_progress": request.stats.overall_progress,
    }
    with trace("analytics.insights", metadata=metadata, request_id=request_id):
        completion = client.complete(prompts.system, prompts.user, max_tokens=policy.max_tokens, request_id=request_id)
        insights = parse_completion(completion.content, InsightsPayload).to_wire()

    return InsightsResult(insights=insights, completion=completion, generated_at=datetime.now(timezone.utc))
