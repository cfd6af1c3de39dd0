"""Tests for the client transports and startup transport selection."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from heartline.domain.entities import GenerationRequest
from heartline.domain.exceptions import GatewayNotConfiguredError, TransportError, UpstreamError
from heartline.infrastructure.bridge_transport import BridgeTransport, RelayHostBridge
from heartline.infrastructure.config import Settings
from heartline.infrastructure.http_transport import HttpTransport
from heartline.infrastructure.transport_factory import build_transport
from heartline.services.relay import ChatRelayUseCase

from conftest import UpstreamRecorder, make_adapter


def _transport(handler) -> HttpTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTransport(client, base_url="http://gateway.test/")


class TestHttpTransport:
    @pytest.mark.asyncio
    async def test_posts_request_fields_and_returns_content(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"content": '{"message":"Hi!"}'})

        response = await _transport(handler).generate(
            GenerationRequest(prompt="Say hi", model="gpt-4o-mini", json_mode=True)
        )

        assert response.content == '{"message":"Hi!"}'
        assert str(seen[0].url) == "http://gateway.test/api/chat"
        assert seen[0].method == "POST"
        assert json.loads(seen[0].content) == {
            "prompt": "Say hi",
            "model": "gpt-4o-mini",
            "jsonMode": True,
        }

    @pytest.mark.asyncio
    async def test_error_payload_message_is_raised(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"error": "Azure OpenAI error: slow down"})

        with pytest.raises(TransportError) as exc_info:
            await _transport(handler).generate(GenerationRequest(prompt="x"))

        assert str(exc_info.value) == "Azure OpenAI error: slow down"
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_unparsable_error_falls_back_to_generic_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        with pytest.raises(TransportError, match="Failed to get AI response"):
            await _transport(handler).generate(GenerationRequest(prompt="x"))

    @pytest.mark.asyncio
    async def test_network_failure_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TransportError):
            await _transport(handler).generate(GenerationRequest(prompt="x"))

    @pytest.mark.asyncio
    async def test_success_without_content_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"unexpected": True})

        with pytest.raises(TransportError, match="content"):
            await _transport(handler).generate(GenerationRequest(prompt="x"))


class TestBridgeTransport:
    @pytest.mark.asyncio
    async def test_delegates_to_host_bridge(self):
        bridge = AsyncMock()
        bridge.llm = AsyncMock(return_value='{"bio":"Hi"}')

        response = await BridgeTransport(bridge).generate(
            GenerationRequest(prompt="p", model="gpt-4o", json_mode=True)
        )

        assert response.content == '{"bio":"Hi"}'
        bridge.llm.assert_awaited_once_with("p", "gpt-4o", True)

    @pytest.mark.asyncio
    async def test_relay_host_bridge_runs_relay_in_process(self):
        completion = AsyncMock()
        completion.complete = AsyncMock(return_value="text")
        bridge = RelayHostBridge(ChatRelayUseCase(completion, default_model="base-model"))

        result = await bridge.llm("hello", json_mode=True)

        assert result == "text"
        completion.complete.assert_awaited_once_with("hello", "base-model", json_mode=True)

    @pytest.mark.asyncio
    async def test_upstream_error_surfaces_as_transport_error(self):
        adapter = make_adapter(UpstreamRecorder(httpx.Response(429, text="quota exceeded")))
        transport = BridgeTransport(
            RelayHostBridge(ChatRelayUseCase(adapter, default_model="gpt-4o-mini"))
        )

        with pytest.raises(TransportError) as exc_info:
            await transport.generate(GenerationRequest(prompt="Write a bio", json_mode=True))

        assert exc_info.value.status_code == 429
        assert str(exc_info.value) == "Azure OpenAI error: quota exceeded"
        assert isinstance(exc_info.value.__cause__, UpstreamError)

    @pytest.mark.asyncio
    async def test_missing_prompt_surfaces_as_transport_error(self):
        completion = AsyncMock()
        transport = BridgeTransport(
            RelayHostBridge(ChatRelayUseCase(completion, default_model="gpt-4o-mini"))
        )

        with pytest.raises(TransportError) as exc_info:
            await transport.generate(GenerationRequest(prompt="   "))

        assert exc_info.value.status_code == 400
        assert str(exc_info.value) == "prompt is required."
        completion.complete.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_error_from_bridge_is_not_rewrapped(self):
        original = TransportError("bridge offline", 503)
        bridge = AsyncMock()
        bridge.llm = AsyncMock(side_effect=original)

        with pytest.raises(TransportError) as exc_info:
            await BridgeTransport(bridge).generate(GenerationRequest(prompt="p"))

        assert exc_info.value is original


class TestBuildTransport:
    def test_http_is_default(self):
        transport = build_transport(Settings(), http_client=httpx.AsyncClient())
        assert isinstance(transport, HttpTransport)

    def test_bridge_with_supplied_host(self):
        transport = build_transport(Settings(llm_transport="bridge"), bridge=AsyncMock())
        assert isinstance(transport, BridgeTransport)

    def test_bridge_without_configuration_fails_at_startup(self):
        with pytest.raises(GatewayNotConfiguredError):
            build_transport(Settings(llm_transport="bridge"))

    def test_bridge_builds_in_process_relay_when_configured(self):
        settings = Settings(
            llm_transport="bridge",
            azure_openai_endpoint="https://example-resource.openai.azure.com",
            azure_openai_key="secret",
        )
        assert isinstance(build_transport(settings), BridgeTransport)
