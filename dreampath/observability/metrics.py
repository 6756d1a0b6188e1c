"""Lightweight metrics helpers."""
from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Dict, Optional

from dreampath.observability.tracing import trace

logger = logging.getLogger(__name__)


def log_metric(name: str, value: float | int, metadata: Optional[Dict[str, Any]] = None) -> None:
    """Record a metric as a short Opik trace; a no-op when Opik is disabled."""
    payload: Dict[str, Any] = {"value": value}
    if metadata:
        payload.update(metadata)

    logger.debug("metric %s=%s", name, value)
    with trace(f"metric:{name}", metadata=payload):
        pass


def record_request_metrics(prefix: str, success: bool, started_at: float) -> None:
    """Emit the success flag and latency for one endpoint invocation."""
    latency_ms = (perf_counter() - started_at) * 1000
    log_metric(f"{prefix}.success", 1 if success else 0)
    log_metric(f"{prefix}.latency_ms", latency_ms)
