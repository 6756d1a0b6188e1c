"""Translate errors into the JSON error envelope returned by every endpoint."""
from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dreampath.api.schemas.common import ErrorPayload
from dreampath.core.errors import DreamPathError, InputValidationError, UpstreamError
from dreampath.services.planning_policy import PlanningPolicy

logger = logging.getLogger(__name__)


def _json_error(status_code: int, message: str, code: str | None = None) -> JSONResponse:
    payload = ErrorPayload(error=message, code=code)
    return JSONResponse(status_code=status_code, content=payload.model_dump(by_alias=True, exclude_none=True))


def error_response(exc: Exception, *, policy: PlanningPolicy) -> JSONResponse:
    """
    Map an error raised while serving ``policy``'s endpoint to an HTTP response.

    Upstream errors the endpoint does not surface fall back to a generic 500 carrying
    the raw message.
    """
    exc = policy.reported_error(exc)
    if isinstance(exc, UpstreamError) and not policy.surfaces(exc):
        return _json_error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), "GENERATION_ERROR")
    if isinstance(exc, DreamPathError):
        return _json_error(exc.status_code, exc.message, exc.code)
    return _json_error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) or f"Failed to complete {policy.name}",
        "GENERATION_ERROR",
    )


def describe_validation_errors(exc: RequestValidationError) -> str:
    missing: List[str] = []
    invalid: List[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        if error.get("type") == "missing":
            missing.append(location or "body")
        else:
            invalid.append(f"{location or 'body'} ({error.get('msg')})")
    parts: List[str] = []
    if missing:
        parts.append(f"Missing required fields: {', '.join(missing)}")
    if invalid:
        parts.append(f"Invalid fields: {', '.join(invalid)}")
    return "; ".join(parts) or InputValidationError.default_message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = describe_validation_errors(exc)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return _json_error(status.HTTP_400_BAD_REQUEST, message, InputValidationError.code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return JSONResponse(status_code=exc.status_code, content={"error": "Method not allowed"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})
