"""Prometheus metrics for the HTTP surface, solve outcomes and model latency.

Label values come from fixed vocabularies or route templates, never from
request content.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import cast

from fastapi import APIRouter, Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

metrics_router = APIRouter(tags=["metrics"])

SOLVE_OUTCOMES = frozenset({"success", "invalid", "unavailable", "upstream_error"})

_HTTP_LABELS = ("method", "route", "status_code")

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    labelnames=_HTTP_LABELS,
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=_HTTP_LABELS,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)
solve_requests_total = Counter(
    "solve_requests_total",
    "Solve requests by outcome",
    labelnames=("outcome",),
)
llm_request_duration_seconds = Histogram(
    "llm_request_duration_seconds",
    "Upstream LLM request duration in seconds",
    labelnames=("outcome",),
    # Up to and past the default 30s client timeout.
    buckets=(0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0, 60.0),
)


def route_label(request: Request) -> str:
    """Route template of the matched endpoint, or "unmatched" for 404s."""

    path = getattr(request.scope.get("route"), "path", None)
    return path if isinstance(path, str) and path else "unmatched"


def record_solve_outcome(outcome: str) -> None:
    if outcome not in SOLVE_OUTCOMES:
        raise ValueError(f"unknown solve outcome: {outcome!r}")
    solve_requests_total.labels(outcome=outcome).inc()


class LLMCallTimer:
    """Mutable outcome holder for `track_llm_call`; defaults to "error"."""

    def __init__(self) -> None:
        self.outcome = "error"


@contextmanager
def track_llm_call() -> Iterator[LLMCallTimer]:
    timer = LLMCallTimer()
    started = time.perf_counter()
    try:
        yield timer
    finally:
        llm_request_duration_seconds.labels(outcome=timer.outcome).observe(
            time.perf_counter() - started
        )


class PrometheusMetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            labels = {
                "method": request.method,
                "route": route_label(request),
                "status_code": str(status_code),
            }
            http_requests_total.labels(**labels).inc()
            http_request_duration_seconds.labels(**labels).observe(time.perf_counter() - started)


@metrics_router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    # Default registry; the service runs as a single process.
    return Response(content=cast(bytes, generate_latest()), media_type=CONTENT_TYPE_LATEST)
