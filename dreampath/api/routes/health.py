"""Readiness probe."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Request

from dreampath.core.config import settings
from dreampath.observability.tracing import trace

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", summary="Readiness probe")
def health_check(request: Request) -> Dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/api/health"}, request_id=request.state.request_id):
        return {
            "status": "ok",
            "service": settings.service_name,
            "version": settings.app_version,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
