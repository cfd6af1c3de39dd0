"""Port: LLM transport — how the client facade reaches a model."""

from __future__ import annotations

from typing import Protocol

from heartline.domain.entities import GenerationRequest, GenerationResponse


class LlmTransport(Protocol):
    """Abstract contract shared by every client-side transport."""

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Run *request* and return the raw response text."""
        ...


class HostBridge(Protocol):
    """In-process prompt executor offered by a capable host."""

    async def llm(
        self, prompt: str, model_name: str | None = None, json_mode: bool = False
    ) -> str:
        """Execute *prompt* and return the model's text."""
        ...
