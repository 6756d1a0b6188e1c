"""Logging setup for the API process."""
from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any, Dict

from dreampath.core.context import current_request_id

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | req=%(request_id)s | %(message)s"

QUIET_LOGGERS = ("httpx", "openai", "opik")

_configured = False


class RequestContextFilter(logging.Filter):
    """Stamp every record with the id of the request being served, or ``-`` outside one."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id() or "-"
        return True


def build_logging_config(log_level: str) -> Dict[str, Any]:
    loggers: Dict[str, Dict[str, Any]] = {"dreampath": {"level": log_level}}
    for name in QUIET_LOGGERS:
        loggers[name] = {"level": "WARNING"}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"default": {"format": LOG_FORMAT}},
        "filters": {"request_context": {"()": RequestContextFilter}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "level": log_level,
                "filters": ["request_context"],
            }
        },
        "loggers": loggers,
        "root": {"handlers": ["console"], "level": log_level},
    }


def configure_logging(*, log_level: str = "INFO") -> None:
    """Apply the logging config once per process."""
    global _configured
    if _configured:
        return

    dictConfig(build_logging_config(log_level.upper()))
    logging.getLogger(__name__).debug("Logging configured at %s", log_level)
    _configured = True
