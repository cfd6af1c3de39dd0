"""Client-side wiring — pick the transport once, at startup."""

from __future__ import annotations

import logging

import httpx

from heartline.domain.exceptions import GatewayNotConfiguredError
from heartline.domain.ports.llm_transport import HostBridge, LlmTransport
from heartline.domain.ports.profile_store import ProfileStore
from heartline.infrastructure.azure_openai_adapter import AzureOpenAIAdapter
from heartline.infrastructure.bridge_transport import BridgeTransport, RelayHostBridge
from heartline.infrastructure.config import Settings
from heartline.infrastructure.http_transport import HttpTransport
from heartline.infrastructure.profile_store import InMemoryProfileStore, JsonFileProfileStore
from heartline.services.relay import ChatRelayUseCase

logger = logging.getLogger(__name__)


def build_gateway_client(settings: Settings) -> httpx.AsyncClient:
    """HTTP client for talking to the Gateway; no timeout unless configured."""
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.gateway_timeout_seconds))


def build_azure_adapter(settings: Settings) -> AzureOpenAIAdapter:
    """Upstream adapter from settings; refuses when endpoint or key is missing."""
    if not settings.is_gateway_configured:
        raise GatewayNotConfiguredError()
    assert settings.azure_openai_endpoint is not None
    assert settings.azure_openai_key is not None
    return AzureOpenAIAdapter(
        endpoint=settings.azure_openai_endpoint,
        api_key=settings.azure_openai_key.get_secret_value(),
        api_version=settings.azure_openai_api_version,
        temperature=settings.temperature,
    )


def build_relay_bridge(adapter: AzureOpenAIAdapter, settings: Settings) -> RelayHostBridge:
    """In-process bridge running the relay directly against *adapter*."""
    return RelayHostBridge(ChatRelayUseCase(adapter, default_model=settings.default_model))


def build_transport(
    settings: Settings,
    *,
    http_client: httpx.AsyncClient | None = None,
    bridge: HostBridge | None = None,
) -> LlmTransport:
    """Return the transport named by ``settings.llm_transport``.

    Pieces not supplied are built from *settings*; nothing here closes them.
    :func:`heartline.client.open_session` supplies and closes its own.
    """
    if settings.llm_transport == "bridge":
        if bridge is None:
            bridge = build_relay_bridge(build_azure_adapter(settings), settings)
        logger.info("Using in-process bridge transport")
        return BridgeTransport(bridge)

    if http_client is None:
        http_client = build_gateway_client(settings)
    logger.info("Using HTTP transport to %s", settings.gateway_url)
    return HttpTransport(http_client, base_url=settings.gateway_url)


def build_profile_store(settings: Settings) -> ProfileStore:
    if settings.profile_store_path:
        return JsonFileProfileStore(settings.profile_store_path)
    return InMemoryProfileStore()
