from __future__ import annotations

from app.core.llm.openai_client import OpenAIClient, OpenAIConfig
from app.core.settings import get_settings


def get_openai_client() -> OpenAIClient | None:
    """FastAPI dependency; None without an API key so /api/solve can fail with a clean 500."""

    settings = get_settings()
    if not settings.openai_api_key:
        return None
    return OpenAIClient(config=OpenAIConfig.from_settings(settings))
