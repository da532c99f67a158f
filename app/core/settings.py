from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Formula Solver API"
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
        description="Root log level.",
    )

    # HTTP surface
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS", "cors_allow_origins"),
        description="Origins allowed by CORS (JSON list). Defaults to any origin.",
    )
    max_request_body_mb: int = Field(
        default=10,
        ge=1,
        validation_alias=AliasChoices("MAX_REQUEST_BODY_MB", "max_request_body_mb"),
        description="Requests declaring a larger Content-Length are rejected with 413.",
    )
    max_image_upload_mb: int = Field(
        default=10,
        ge=1,
        validation_alias=AliasChoices("MAX_IMAGE_UPLOAD_MB", "max_image_upload_mb"),
        description="Maximum size of an uploaded problem image (MB).",
    )
    image_allowed_mime_types: list[str] = Field(
        default_factory=lambda: [
            "image/png",
            "image/jpeg",
            "image/gif",
            "image/webp",
        ],
        validation_alias=AliasChoices("IMAGE_ALLOWED_MIME_TYPES", "image_allowed_mime_types"),
        description="Allowlist of MIME types accepted for problem images.",
    )

    # LLM integration (OpenAI)
    # Prompts, images and model output are never logged.
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "openai_api_key"),
        description="OpenAI API key (required for /api/solve).",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        validation_alias=AliasChoices("OPENAI_MODEL", "openai_model"),
        description="OpenAI model identifier used for solving.",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        validation_alias=AliasChoices("OPENAI_BASE_URL", "openai_base_url"),
        description="Chat-completions API base URL; any OpenAI-compatible endpoint works.",
    )
    openai_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        validation_alias=AliasChoices("OPENAI_TIMEOUT_SECONDS", "openai_timeout_seconds"),
        description="Per-call timeout for the chat-completions request (seconds).",
    )
    openai_max_tokens: int = Field(
        default=1000,
        ge=1,
        validation_alias=AliasChoices("OPENAI_MAX_TOKENS", "openai_max_tokens"),
        description="Upper bound on generated tokens per answer.",
    )
    openai_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("OPENAI_TEMPERATURE", "openai_temperature"),
        description="Sampling temperature; kept low for consistent formulas.",
    )

    @property
    def max_request_body_bytes(self) -> int:
        return int(self.max_request_body_mb) * 1024 * 1024

    @property
    def max_image_upload_bytes(self) -> int:
        return int(self.max_image_upload_mb) * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    return Settings()
