from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from app.core.metrics import track_llm_call
from app.core.settings import Settings


class OpenAIError(Exception):
    """Base error for OpenAI client failures (mapped to an opaque 500)."""


class OpenAIUpstreamError(OpenAIError):
    """Raised when OpenAI API fails or returns an unexpected response."""


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float
    max_tokens: int = 1000
    temperature: float = 0.3

    @classmethod
    def from_settings(cls, settings: Settings) -> OpenAIConfig:
        return cls(
            api_key=settings.openai_api_key or "",
            base_url=settings.openai_base_url,
            model=settings.openai_model,
            timeout_seconds=float(settings.openai_timeout_seconds),
            max_tokens=int(settings.openai_max_tokens),
            temperature=float(settings.openai_temperature),
        )


class OpenAIClient:
    """Chat-completions client that returns the raw answer text.

    A single attempt per call and no logging here: messages and answers are
    user content. Callers sanitize the returned text.
    """

    def __init__(
        self,
        *,
        config: OpenAIConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    async def generate_text(self, *, messages: list[dict[str, Any]]) -> str:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": self._config.model,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "messages": messages,
        }

        with track_llm_call() as timer:
            try:
                async with httpx.AsyncClient(
                    timeout=self._config.timeout_seconds, transport=self._transport
                ) as client:
                    resp = await client.post(url, headers=headers, json=payload)
            except httpx.TimeoutException as exc:
                timer.outcome = "timeout"
                raise OpenAIUpstreamError("LLM request timed out") from exc
            except httpx.HTTPError as exc:
                raise OpenAIUpstreamError("LLM request failed") from exc
            if resp.status_code == 200:
                timer.outcome = "ok"

        if resp.status_code != 200:
            # Avoid leaking upstream details to callers; map to a generic error at the edge.
            raise OpenAIUpstreamError("LLM service returned an error")

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except Exception as exc:  # noqa: BLE001
            raise OpenAIUpstreamError("LLM response was not valid JSON") from exc

        if content is None:
            return ""
        if not isinstance(content, str):
            raise OpenAIUpstreamError("LLM response content must be text")
        return content
