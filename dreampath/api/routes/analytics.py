"""Analytics insights endpoint."""
from __future__ import annotations

import logging
from time import perf_counter

from fastapi import APIRouter, Depends, Request

from dreampath.api.errors import error_response
from dreampath.api.schemas.analytics import AnalyticsInsightsRequest, AnalyticsInsightsResponse
from dreampath.api.schemas.common import UsagePayload
from dreampath.observability.metrics import record_request_metrics
from dreampath.services.analytics_insights import generate_insights
from dreampath.services.completion_client import CompletionClient, get_completion_client
from dreampath.services.planning_policy import ANALYTICS_POLICY

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analytics"])


@router.post("/analytics-insights", response_model=AnalyticsInsightsResponse)
def analytics_insights_endpoint(
    payload: AnalyticsInsightsRequest,
    request: Request,
    client: CompletionClient = Depends(get_completion_client),
):
    """Summarize the user's week and suggest where to focus next."""
    request_id = getattr(request.state, "request_id", None)
    start = perf_counter()
    success = False
    try:
        result = generate_insights(payload, client, policy=ANALYTICS_POLICY, request_id=request_id)
        success = True
    except Exception as exc:
        logger.exception("Analytics insights generation failed")
        return error_response(exc, policy=ANALYTICS_POLICY)
    finally:
        record_request_metrics("analytics.insights", success, start)

    return AnalyticsInsightsResponse(
        data=result.insights,
        usage=UsagePayload.from_completion(result.completion),
        generated_at=result.generated_at,
    )
