"""Azure OpenAI adapter — implements the ChatCompletionPort."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from openai import APIConnectionError, APIStatusError, AsyncAzureOpenAI

from heartline.domain.exceptions import UpstreamError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


class AzureOpenAIAdapter:
    """Concrete ``ChatCompletionPort`` backed by an Azure OpenAI deployment.

    The deployment is chosen per call from the ``model`` argument.  Failed
    calls are never retried: a non-success status is surfaced as
    :class:`UpstreamError` carrying the upstream status and body text.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        api_version: str = "2024-08-01-preview",
        temperature: float = 0.7,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = AsyncAzureOpenAI(
            azure_endpoint=endpoint.rstrip("/"),
            api_key=api_key,
            api_version=api_version,
            max_retries=0,
            http_client=http_client,
        )
        self._temperature = temperature

    async def complete(self, prompt: str, model: str, *, json_mode: bool = False) -> str:
        """Send *prompt* as one user message and return the first choice text."""
        kwargs: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self._temperature,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        logger.info("Upstream call: deployment=%s json_mode=%s", model, json_mode)
        try:
            response = await self._client.chat.completions.create(**kwargs)

        except APIStatusError as exc:
            logger.error("Azure OpenAI returned HTTP %d", exc.status_code)
            raise UpstreamError(exc.status_code, exc.response.text) from exc

        except APIConnectionError as exc:
            logger.error("Azure OpenAI unreachable: %s", exc)
            raise UpstreamUnavailableError(str(exc)) from exc

        return _first_choice_text(response)

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()


def _first_choice_text(response: Any) -> str:
    # Responses are built without validation, so any level may be missing.
    choices = getattr(response, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None) or ""
