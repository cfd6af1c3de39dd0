"""Client composition root — settings → transport → assistant → session."""

from __future__ import annotations

import asyncio
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator

from heartline.infrastructure.config import Settings, get_settings
from heartline.infrastructure.transport_factory import (
    build_azure_adapter,
    build_gateway_client,
    build_profile_store,
    build_relay_bridge,
    build_transport,
)
from heartline.services.assistant import DatingAssistant, LlmFacade
from heartline.services.session import MatchingSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_session(settings: Settings | None = None) -> AsyncIterator[MatchingSession]:
    """Yield a wired :class:`MatchingSession`; its HTTP resources close on exit."""
    settings = settings or get_settings()
    async with AsyncExitStack() as stack:
        if settings.llm_transport == "bridge":
            adapter = build_azure_adapter(settings)
            stack.push_async_callback(adapter.close)
            transport = build_transport(settings, bridge=build_relay_bridge(adapter, settings))
        else:
            client = build_gateway_client(settings)
            stack.push_async_callback(client.aclose)
            transport = build_transport(settings, http_client=client)

        assistant = DatingAssistant(LlmFacade(transport))
        yield MatchingSession(build_profile_store(settings), assistant)


async def _restore_and_report(settings: Settings) -> None:
    async with open_session(settings) as session:
        state = await session.restore()
        logger.info("Session state: %s", state.value)
        for qualified in session.matches:
            logger.info(
                "%s  %.0f%%  %s",
                qualified.match.name,
                qualified.compatibility.score * 100,
                qualified.compatibility.explanation,
            )


def main() -> None:
    """Restore the stored profile and log its qualified matches."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    asyncio.run(_restore_and_report(settings))


if __name__ == "__main__":
    main()
