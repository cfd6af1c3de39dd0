"""Bridge transport — runs prompts through an in-process host bridge."""

from __future__ import annotations

import logging

from heartline.domain.entities import GenerationRequest, GenerationResponse
from heartline.domain.exceptions import HeartlineError, TransportError
from heartline.domain.ports.llm_transport import HostBridge
from heartline.services.relay import ChatRelayUseCase

logger = logging.getLogger(__name__)


class BridgeTransport:
    """Concrete ``LlmTransport`` that skips the network entirely.

    Failures raised by the bridge surface as :class:`TransportError`, the
    same as on the HTTP path.
    """

    def __init__(self, bridge: HostBridge) -> None:
        self._bridge = bridge

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        try:
            content = await self._bridge.llm(request.prompt, request.model, request.json_mode)
        except TransportError:
            raise
        except HeartlineError as exc:
            status_code = getattr(exc, "status_code", None)
            logger.warning("Bridge call failed (%s): %s", status_code, exc)
            raise TransportError(str(exc), status_code) from exc
        return GenerationResponse(content=content)


class RelayHostBridge:
    """``HostBridge`` that runs the Gateway's relay use case in-process."""

    def __init__(self, relay: ChatRelayUseCase) -> None:
        self._relay = relay

    async def llm(
        self, prompt: str, model_name: str | None = None, json_mode: bool = False
    ) -> str:
        response = await self._relay.execute(
            GenerationRequest(prompt=prompt, model=model_name, json_mode=json_mode)
        )
        return response.content
