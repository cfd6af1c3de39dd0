"""
Shared test fixtures.

Provides sample profiles, a scripted fake transport, and factories for
mocked upstream (Azure OpenAI) HTTP clients.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from heartline.domain.entities import GenerationRequest, GenerationResponse
from heartline.domain.profile import MatchProfile, UserProfile
from heartline.infrastructure.azure_openai_adapter import AzureOpenAIAdapter
from heartline.infrastructure.config import get_settings
from heartline.services.assistant import DatingAssistant, LlmFacade


# ============ Sample Data ============

def make_user(**overrides: Any) -> UserProfile:
    data: dict[str, Any] = {
        "name": "Ana",
        "birthDate": "1994-04-02",
        "values": ["honesty", "curiosity"],
        "interests": ["hiking", "jazz", "cooking"],
        "lifestyle": ["active"],
        "languages": ["English", "Romanian"],
        "industry": "Design",
        "optInAstrology": True,
    }
    data.update(overrides)
    return UserProfile.model_validate(data)


def make_match(match_id: str, name: str = "Match", **overrides: Any) -> MatchProfile:
    data: dict[str, Any] = {
        "id": match_id,
        "name": name,
        "bio": f"{name} likes long walks.",
        "birthDate": "1992-08-15",
        "interests": ["hiking"],
        "languages": ["English"],
    }
    data.update(overrides)
    return MatchProfile.model_validate(data)


@pytest.fixture
def user_profile() -> UserProfile:
    return make_user()


@pytest.fixture
def match_profiles() -> list[MatchProfile]:
    return [
        make_match("m1", "Bogdan"),
        make_match("m2", "Carmen"),
        make_match("m3", "Dan"),
    ]


# ============ Fake Transport ============

class FakeTransport:
    """Scripted LlmTransport: pops one queued answer (or exception) per call."""

    def __init__(self, *responses: str | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[GenerationRequest] = []

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError("unexpected LLM call")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return GenerationResponse(content=item)


@pytest.fixture
def make_assistant() -> Callable[..., tuple[DatingAssistant, FakeTransport]]:
    def _factory(*responses: str | Exception) -> tuple[DatingAssistant, FakeTransport]:
        transport = FakeTransport(*responses)
        return DatingAssistant(LlmFacade(transport)), transport

    return _factory


# ============ Mock Upstream ============

def chat_completion(content: str) -> dict[str, Any]:
    """Minimal chat-completion body carrying *content* as the first choice."""
    return {"choices": [{"message": {"content": content}}]}


class UpstreamRecorder:
    """httpx handler that records requests and replies with a fixed response."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


def make_adapter(handler: Callable[[httpx.Request], httpx.Response]) -> AzureOpenAIAdapter:
    return AzureOpenAIAdapter(
        endpoint="https://example-resource.openai.azure.com/",
        api_key="test-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


# ============ Settings isolation ============

@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Any):
    """Run every test without Azure credentials and without a stray .env."""
    for name in ("AZURE_OPENAI_ENDPOINT", "AZURE_OPENAI_KEY", "LLM_TRANSPORT", "GATEWAY_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
