from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("app.http")


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject requests whose declared Content-Length exceeds `max_bytes` with 413.

    Bodies without a Content-Length (chunked) pass through; uploads are
    size-checked again where they are read.
    """

    def __init__(self, app, *, max_bytes: int):
        super().__init__(app)
        self._max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        declared = request.headers.get("content-length")
        if declared is not None:
            try:
                size = int(declared)
            except ValueError:
                return JSONResponse(status_code=400, content={"error": "Invalid Content-Length"})
            if size > self._max_bytes:
                logger.info(
                    "Request body too large",
                    extra={
                        "request_id": getattr(request.state, "request_id", None),
                        "http_method": request.method,
                        "request_path": request.url.path,
                        "status_code": 413,
                    },
                )
                return JSONResponse(status_code=413, content={"error": "Request body too large"})
        return await call_next(request)
