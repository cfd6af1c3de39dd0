"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging

from heartline.domain.exceptions import GatewayNotConfiguredError
from heartline.infrastructure.azure_openai_adapter import AzureOpenAIAdapter
from heartline.infrastructure.config import get_settings
from heartline.infrastructure.transport_factory import build_azure_adapter
from heartline.services.relay import ChatRelayUseCase

logger = logging.getLogger(__name__)

_azure_adapter: AzureOpenAIAdapter | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _azure_adapter  # noqa: PLW0603

    settings = get_settings()
    if not settings.is_gateway_configured:
        logger.warning(
            "AZURE_OPENAI_ENDPOINT / AZURE_OPENAI_KEY not set; "
            "every /api/chat request will fail with 500"
        )
        return

    _azure_adapter = build_azure_adapter(settings)


async def shutdown() -> None:
    """Release shared resources."""
    global _azure_adapter  # noqa: PLW0603

    if _azure_adapter:
        await _azure_adapter.close()
        _azure_adapter = None


def get_relay() -> ChatRelayUseCase:
    """Build the relay use case, refusing service when upstream is unconfigured."""
    if _azure_adapter is None:
        raise GatewayNotConfiguredError()
    return ChatRelayUseCase(_azure_adapter, default_model=get_settings().default_model)
