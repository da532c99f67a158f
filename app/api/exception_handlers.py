from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.domain.exceptions import SolveRequestError

logger = logging.getLogger("app.solve_errors")


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(SolveRequestError)
    async def handle_solve_request_error(
        request: Request,
        exc: SolveRequestError,
    ) -> JSONResponse:
        # Metadata only: never the problem text, image or model output.
        request_id = getattr(request.state, "request_id", None) or request.headers.get(
            "X-Request-ID"
        )
        logger.info(
            "Solve request not completed",
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": exc.status_code,
                "error_type": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
