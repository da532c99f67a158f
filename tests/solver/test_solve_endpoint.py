from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.core.llm.deps import get_openai_client
from app.main import create_app
from app.solver.prompt import SYSTEM_PROMPT
from tests.solver._helpers import PNG_BYTES, FailingLLMClient, FakeLLMClient


def test_solve_returns_sanitized_result(client: TestClient, fake_llm: FakeLLMClient) -> None:
    res = client.post(
        "/api/solve",
        json={"subject": "math", "prompt": "18 apples shared by 6 people. How many each?"},
    )
    assert res.status_code == 200, res.text
    assert res.json() == {"result": "a = 18/6\na = 3"}
    assert "X-Request-ID" in res.headers

    assert len(fake_llm.calls) == 1
    system, user = fake_llm.calls[0]
    assert system == {"role": "system", "content": SYSTEM_PROMPT}
    assert user["role"] == "user"
    assert user["content"][0]["text"].startswith("Subject: math.")
    assert user["content"][1] == {
        "type": "text",
        "text": "18 apples shared by 6 people. How many each?",
    }


def test_solve_with_image_url_only(client: TestClient, fake_llm: FakeLLMClient) -> None:
    res = client.post("/api/solve", json={"image": "https://example.test/problem.png"})
    assert res.status_code == 200, res.text

    content = fake_llm.calls[0][1]["content"]
    assert content[0]["text"].startswith("Subject: unspecified.")
    assert content[-1] == {
        "type": "image_url",
        "image_url": {"url": "https://example.test/problem.png"},
    }


def test_solve_result_can_be_empty(client: TestClient, fake_llm: FakeLLMClient) -> None:
    fake_llm.answer = "I could not find any numbers in this problem."
    res = client.post("/api/solve", json={"prompt": "Describe a triangle."})
    assert res.status_code == 200
    assert res.json() == {"result": ""}


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"subject": "physics"},
        {"subject": "physics", "prompt": "", "image": ""},
        {"prompt": None, "image": None},
    ],
)
def test_solve_without_prompt_or_image_returns_400(
    client: TestClient, fake_llm: FakeLLMClient, body: dict
) -> None:
    res = client.post("/api/solve", json=body)
    assert res.status_code == 400
    assert res.json() == {"error": "Prompt or image is required"}
    assert fake_llm.calls == []


def test_solve_invalid_json_returns_400(client: TestClient, fake_llm: FakeLLMClient) -> None:
    res = client.post(
        "/api/solve",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert "error" in res.json()
    assert fake_llm.calls == []


@pytest.mark.parametrize(
    "body",
    [
        {"prompt": 42},
        {"image": "ftp://example.test/problem.png"},
        ["prompt"],
    ],
)
def test_solve_schema_errors_return_422(
    client: TestClient, fake_llm: FakeLLMClient, body: object
) -> None:
    res = client.post("/api/solve", json=body)
    assert res.status_code == 422
    assert "error" in res.json()
    assert fake_llm.calls == []


def test_solve_unsupported_content_type_returns_415(client: TestClient) -> None:
    res = client.post(
        "/api/solve", content=b"x = 1", headers={"Content-Type": "text/plain"}
    )
    assert res.status_code == 415
    assert "error" in res.json()


def test_solve_multipart_upload_is_sent_as_data_url(
    client: TestClient, fake_llm: FakeLLMClient
) -> None:
    res = client.post(
        "/api/solve",
        data={"subject": "geometry", "prompt": "Find x."},
        files={"file": ("problem.png", PNG_BYTES, "application/octet-stream")},
    )
    assert res.status_code == 200, res.text

    content = fake_llm.calls[0][1]["content"]
    assert content[0]["text"].startswith("Subject: geometry.")
    assert content[1] == {"type": "text", "text": "Find x."}
    image_url = content[2]["image_url"]["url"]
    assert image_url.startswith("data:image/png;base64,")


def test_solve_multipart_rejects_non_image_upload(
    client: TestClient, fake_llm: FakeLLMClient
) -> None:
    res = client.post(
        "/api/solve",
        data={"prompt": "Find x."},
        files={"file": ("notes.txt", b"just text", "text/plain")},
    )
    assert res.status_code == 415
    assert res.json() == {"error": "Unsupported media type: text/plain"}
    assert fake_llm.calls == []


def test_solve_multipart_rejects_oversized_upload(
    client: TestClient, fake_llm: FakeLLMClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("MAX_IMAGE_UPLOAD_MB", "1")
    from app.core.settings import get_settings

    get_settings.cache_clear()

    too_big = PNG_BYTES + b"\x00" * (1024 * 1024)
    res = client.post(
        "/api/solve",
        data={"prompt": "Find x."},
        files={"file": ("problem.png", too_big, "image/png")},
    )
    assert res.status_code == 413
    assert res.json() == {"error": "Uploaded image is too large"}
    assert fake_llm.calls == []


def test_solve_upstream_failure_returns_opaque_500() -> None:
    failing = FailingLLMClient()
    app = create_app()
    app.dependency_overrides[get_openai_client] = lambda: failing
    with TestClient(app) as client:
        res = client.post("/api/solve", json={"prompt": "2 + 2"})

    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}
    assert "sk-secret" not in res.text
    assert failing.calls == 1


def test_solve_without_api_key_returns_500() -> None:
    app = create_app()
    with TestClient(app) as client:
        res = client.post("/api/solve", json={"prompt": "2 + 2"})

    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error"}


def test_solve_counts_outcomes_in_metrics(client: TestClient) -> None:
    client.post("/api/solve", json={"prompt": "2 + 2"})
    client.post("/api/solve", json={})

    text = client.get("/metrics").text
    assert 'solve_requests_total{outcome="success"}' in text
    assert 'solve_requests_total{outcome="invalid"}' in text
