from __future__ import annotations

from typing import Any, Protocol

from app.solver.prompt import build_solve_messages
from app.solver.sanitizer import sanitize_output


class LLMClient(Protocol):
    async def generate_text(self, *, messages: list[dict[str, Any]]) -> str: ...


class SolverLLMError(Exception):
    """Raised when the LLM call fails; the original error is chained."""


class SolverService:
    def __init__(self, *, llm_client: LLMClient):
        self._llm = llm_client

    async def solve(
        self,
        *,
        subject: str | None,
        prompt: str | None,
        image: str | None,
    ) -> str:
        """
        Ask the model once and return its sanitized answer.

        The sanitizer only runs on a successful response; any client failure is
        raised as SolverLLMError without retrying.
        """

        messages = build_solve_messages(subject=subject, prompt=prompt, image=image)
        try:
            raw = await self._llm.generate_text(messages=messages)
        except Exception as exc:  # noqa: BLE001
            raise SolverLLMError("LLM solve failed") from exc

        return sanitize_output(raw if isinstance(raw, str) else None)
