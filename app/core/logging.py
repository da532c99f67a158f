"""Logging setup: one JSON object per line on stdout.

Only request metadata is logged. Problem text, images and model answers never
reach a log record, so nothing here needs scrubbing.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import UTC, datetime
from typing import Any

# Request metadata copied into every payload (None when absent).
_REQUEST_FIELDS = {
    "request_id": ("request_id",),
    "method": ("method", "http_method"),
    "path": ("path", "request_path"),
    "status_code": ("status_code",),
    "duration_ms": ("duration_ms",),
}
# Solve metadata, included only when set on the record.
_SOLVE_FIELDS = ("outcome", "error_type", "has_prompt", "has_image")


def _first_attr(record: logging.LogRecord, names: tuple[str, ...]) -> Any:
    for name in names:
        value = getattr(record, name, None)
        if value is not None:
            return value
    return None


class JsonFormatter(logging.Formatter):
    """Format records as JSON; missing `extra` fields never raise.

    Third-party records (uvicorn, httpx) carry none of the request fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update({key: _first_attr(record, names) for key, names in _REQUEST_FIELDS.items()})
        for name in _SOLVE_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def build_logging_config(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"json": {"()": "app.core.logging.JsonFormatter"}},
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            }
        },
        "loggers": {
            # httpx logs full upstream URLs at INFO; HttpLoggingMiddleware replaces uvicorn's access log.
            "httpx": {"level": "WARNING"},
            "uvicorn.access": {"level": "WARNING"},
        },
        "root": {"level": level.upper(), "handlers": ["stdout"]},
    }


def setup_logging(level: str | None = None) -> None:
    """Configure application logging; defaults to the LOG_LEVEL setting."""

    if level is None:
        from app.core.settings import get_settings

        level = get_settings().log_level
    logging.config.dictConfig(build_logging_config(str(level)))
