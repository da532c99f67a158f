from __future__ import annotations

import pytest

from tests.solver._helpers import FakeLLMClient


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    # Tests must never reach the real OpenAI API.
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    # Settings are cached via @lru_cache; clear so each test sees its own environment.
    from app.core.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def client(fake_llm: FakeLLMClient):
    from fastapi.testclient import TestClient

    from app.core.llm.deps import get_openai_client
    from app.main import create_app

    app = create_app()
    app.dependency_overrides[get_openai_client] = lambda: fake_llm
    with TestClient(app) as c:
        yield c
