"""Opik client shared by generation traces and metrics."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from dreampath.core.config import Settings, get_settings

try:
    from opik import Opik
except ImportError:  # pragma: no cover
    Opik = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)


def build_opik_client(app_settings: Settings) -> Optional["Opik"]:
    """Return an Opik client for ``app_settings``, or None when tracing is off or misconfigured."""
    if Opik is None or not app_settings.opik_enabled:
        return None

    if not app_settings.opik_api_key:
        logger.warning("OPIK_ENABLED is true but OPIK_API_KEY is missing; generation traces stay local.")
        return None

    try:
        client = Opik(project_name=app_settings.opik_project, api_key=app_settings.opik_api_key)
    except Exception as exc:  # pragma: no cover - tracing must never break requests
        logger.warning("Failed to initialize Opik, generation tracing disabled: %s", exc)
        return None

    logger.info("Opik tracing enabled for project %s", app_settings.opik_project)
    return client


@lru_cache(maxsize=1)
def get_opik_client() -> Optional["Opik"]:
    """Process-wide Opik client, built on first use."""
    return build_opik_client(get_settings())


def init_opik() -> Optional["Opik"]:
    """Build the client during application startup."""
    return get_opik_client()
