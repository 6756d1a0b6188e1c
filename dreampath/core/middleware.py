"""Request id and CORS middleware for the API."""
from __future__ import annotations

import logging
from time import perf_counter
from typing import Callable, Dict
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from dreampath.core.context import bound_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind the caller's request id (or a fresh one), echo it back and log the outcome."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        started = perf_counter()

        with bound_request_id(request_id):
            response = await call_next(request)
            logger.info(
                "%s %s -> %d in %.0fms",
                request.method,
                request.url.path,
                response.status_code,
                (perf_counter() - started) * 1000,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Attach the fixed CORS header set and answer preflight requests directly."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
