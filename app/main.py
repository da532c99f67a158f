from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.body_limit import BodySizeLimitMiddleware
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings
from app.solver.router import router as solver_router

setup_logging()


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Solve math, physics and chemistry problems with a language model and get back "
            "formulas only.\n\n"
            "Design principles:\n"
            "- Model output is untrusted; every answer passes through a deterministic "
            "sanitizer that keeps formulas, numeric results and answer tokens.\n"
            "- The sanitizer never fails; when no math can be extracted the result is empty.\n"
            "- Logging and metrics carry request metadata only, never problem content."
        ),
        docs_url="/swagger",
        redoc_url="/docs",
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
            {
                "name": "solver",
                "description": "Submit a problem (text and/or image) and receive formulas.",
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    # Added innermost first: CORS wraps logging, which wraps metrics and the size limit.
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_request_body_bytes)
    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "This endpoint does not call the language model, so it is safe for frequent "
            "uptime checks."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(solver_router)
    return app


app = create_app()
