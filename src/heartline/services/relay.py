"""Chat relay use case — the core of the Model Gateway.

Accepts one generation request, forwards it to the upstream chat-completion
port, and hands back the textual answer.  Stateless across calls.
"""

from __future__ import annotations

import logging

from heartline.domain.entities import GenerationRequest, GenerationResponse
from heartline.domain.exceptions import PromptRequiredError
from heartline.domain.ports.chat_completion import ChatCompletionPort

logger = logging.getLogger(__name__)


class ChatRelayUseCase:
    """Validates a request and relays it upstream.

    Parameters
    ----------
    completion:
        Adapter for the hosted chat-completion model.
    default_model:
        Deployment used when the request names none.
    """

    def __init__(self, completion: ChatCompletionPort, default_model: str = "gpt-4o-mini") -> None:
        self._completion = completion
        self._default_model = default_model

    async def execute(self, request: GenerationRequest) -> GenerationResponse:
        """Relay *request* and return the first-choice text (possibly empty)."""
        if not request.prompt or not request.prompt.strip():
            raise PromptRequiredError()

        model = request.model or self._default_model
        content = await self._completion.complete(
            request.prompt, model, json_mode=request.json_mode
        )
        logger.info("Relayed prompt: model=%s chars_out=%d", model, len(content))
        return GenerationResponse(content=content)
