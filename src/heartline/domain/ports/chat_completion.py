"""Port: upstream chat completion — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class ChatCompletionPort(Protocol):
    """Abstract contract for the hosted chat-completion model behind the Gateway."""

    async def complete(self, prompt: str, model: str, *, json_mode: bool = False) -> str:
        """Send *prompt* as a single user message and return the first choice text."""
        ...
