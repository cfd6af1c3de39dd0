"""Tests for the Model Gateway (POST /api/chat)."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import UpstreamRecorder, chat_completion, make_adapter
from heartline.interface.app import create_app
from heartline.interface.dependencies import get_relay
from heartline.services.relay import ChatRelayUseCase


def _client_with_upstream(recorder: UpstreamRecorder) -> TestClient:
    app = create_app()
    relay = ChatRelayUseCase(make_adapter(recorder), default_model="gpt-4o-mini")
    app.dependency_overrides[get_relay] = lambda: relay
    return TestClient(app)


@pytest.fixture
def ok_upstream() -> UpstreamRecorder:
    return UpstreamRecorder(httpx.Response(200, json=chat_completion('{"bio":"Loves hiking."}')))


class TestConfiguration:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"json": {"prompt": "Generate a bio"}},
            {"json": {}},
            {"json": {"prompt": ""}},
            {"content": b"not json at all"},
        ],
    )
    def test_unconfigured_gateway_always_500(self, kwargs):
        client = TestClient(create_app())

        resp = client.post("/api/chat", **kwargs)

        assert resp.status_code == 500
        assert resp.json() == {"error": "Azure OpenAI is not configured."}

    def test_health_does_not_need_configuration(self):
        client = TestClient(create_app())
        assert client.get("/health").json() == {"status": "ok"}


class TestValidation:
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"prompt": ""},
            {"prompt": "   "},
            {"prompt": "", "model": "gpt-4o", "jsonMode": True},
            {"model": "gpt-4o"},
        ],
    )
    def test_missing_prompt_is_400(self, ok_upstream, body):
        client = _client_with_upstream(ok_upstream)

        resp = client.post("/api/chat", json=body)

        assert resp.status_code == 400
        assert resp.json() == {"error": "prompt is required."}
        assert ok_upstream.requests == []

    def test_unreadable_body_counts_as_missing_prompt(self, ok_upstream):
        client = _client_with_upstream(ok_upstream)

        resp = client.post("/api/chat", content=b"{broken")

        assert resp.status_code == 400
        assert resp.json() == {"error": "prompt is required."}


class TestRelay:
    def test_happy_path_returns_first_choice_content(self, ok_upstream):
        client = _client_with_upstream(ok_upstream)

        resp = client.post("/api/chat", json={"prompt": "Generate a bio", "jsonMode": True})

        assert resp.status_code == 200
        assert resp.json() == {"content": '{"bio":"Loves hiking."}'}

    def test_upstream_request_shape_with_json_mode(self, ok_upstream):
        client = _client_with_upstream(ok_upstream)

        client.post("/api/chat", json={"prompt": "Hi", "model": "gpt-4o", "jsonMode": True})

        request = ok_upstream.requests[0]
        assert request.url.path == "/openai/deployments/gpt-4o/chat/completions"
        assert request.url.params["api-version"] == "2024-08-01-preview"
        assert request.headers["api-key"] == "test-key"
        body = ok_upstream.last_body
        assert body["messages"] == [{"role": "user", "content": "Hi"}]
        assert body["temperature"] == 0.7
        assert body["response_format"] == {"type": "json_object"}

    def test_default_model_and_no_response_format(self, ok_upstream):
        client = _client_with_upstream(ok_upstream)

        client.post("/api/chat", json={"prompt": "Hi"})

        assert ok_upstream.requests[0].url.path == (
            "/openai/deployments/gpt-4o-mini/chat/completions"
        )
        assert "response_format" not in ok_upstream.last_body

    def test_missing_choices_yield_empty_content(self):
        recorder = UpstreamRecorder(httpx.Response(200, json={"choices": []}))
        client = _client_with_upstream(recorder)

        resp = client.post("/api/chat", json={"prompt": "Hi"})

        assert resp.status_code == 200
        assert resp.json() == {"content": ""}

    def test_upstream_429_is_forwarded_with_body_text(self):
        upstream_body = '{"error":{"code":"429","message":"Rate limit reached"}}'
        recorder = UpstreamRecorder(
            httpx.Response(
                429,
                content=upstream_body.encode(),
                headers={"content-type": "application/json"},
            )
        )
        client = _client_with_upstream(recorder)

        resp = client.post("/api/chat", json={"prompt": "Hi"})

        assert resp.status_code == 429
        assert resp.json() == {"error": f"Azure OpenAI error: {upstream_body}"}
        # No retry on failure
        assert len(recorder.requests) == 1

    def test_upstream_network_failure_is_500(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        app = create_app()
        relay = ChatRelayUseCase(make_adapter(handler))
        app.dependency_overrides[get_relay] = lambda: relay
        client = TestClient(app)

        resp = client.post("/api/chat", json={"prompt": "Hi"})

        assert resp.status_code == 500
        assert resp.json()["error"]


class TestLifespan:
    def test_configured_gateway_accepts_requests(self, monkeypatch):
        monkeypatch.setenv("AZURE_OPENAI_ENDPOINT", "https://example-resource.openai.azure.com")
        monkeypatch.setenv("AZURE_OPENAI_KEY", "secret")

        with TestClient(create_app()) as client:
            resp = client.post("/api/chat", json={})

        # Past the configuration check, so validation answers.
        assert resp.status_code == 400
        assert resp.json() == {"error": "prompt is required."}
