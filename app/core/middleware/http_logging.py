"""HTTP logging middleware.

- Log *metadata only*: no bodies (problem text, images, answers), no query
  strings, no headers.
- Generate or propagate X-Request-ID for correlation.
- Structured logging through the standard library logger `extra` fields.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.metrics import route_label

logger = logging.getLogger("app.http")

REQUEST_ID_HEADER = "X-Request-ID"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def _get_or_create_request_id(*, request: Request) -> str:
    """Return the caller's request id when it is safe, otherwise a new UUID4 hex.

    Only a narrow character set and length is accepted to avoid log injection.
    """

    candidate = request.headers.get(REQUEST_ID_HEADER)
    if candidate and _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def _request_extra(*, request: Request, request_id: str, status_code: int, started: float) -> dict:
    return {
        "request_id": request_id,
        "http_method": request.method,
        "request_path": route_label(request),
        "status_code": status_code,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
    }


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    """Log one record per request and attach a correlation id to the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _get_or_create_request_id(request=request)
        started = time.perf_counter()
        # Downstream handlers read the id from request.state for their own log records.
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - log unexpected exceptions with stack trace, then re-raise
            logger.exception(
                "Unhandled exception while processing request",
                extra=_request_extra(
                    request=request, request_id=request_id, status_code=500, started=started
                ),
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request completed",
            extra=_request_extra(
                request=request,
                request_id=request_id,
                status_code=response.status_code,
                started=started,
            ),
        )
        return response
