"""HTTP transport — reaches the Model Gateway over ``POST /api/chat``."""

from __future__ import annotations

import logging

import httpx

from heartline.domain.entities import GenerationRequest, GenerationResponse
from heartline.domain.exceptions import TransportError

logger = logging.getLogger(__name__)

_CHAT_PATH = "/api/chat"
_GENERIC_ERROR = "Failed to get AI response"


class HttpTransport:
    """Concrete ``LlmTransport`` that posts prompts to the Gateway."""

    def __init__(self, client: httpx.AsyncClient, base_url: str = "") -> None:
        self._client = client
        self._url = f"{base_url.rstrip('/')}{_CHAT_PATH}"

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """POST the request fields and return the ``content`` of a 2xx answer."""
        payload: dict[str, object] = {
            "prompt": request.prompt,
            "jsonMode": request.json_mode,
        }
        if request.model:
            payload["model"] = request.model

        try:
            resp = await self._client.post(self._url, json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"Network error calling {self._url}: {exc}") from exc

        if not resp.is_success:
            message = _error_message(resp)
            logger.warning("Gateway returned HTTP %d: %s", resp.status_code, message)
            raise TransportError(message, resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise TransportError(f"Gateway returned a non-JSON body: {exc}") from exc

        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, str):
            raise TransportError("Gateway response is missing 'content'.")
        return GenerationResponse(content=content)


def _error_message(resp: httpx.Response) -> str:
    """Extract ``error`` from a failure payload, or fall back to a generic message."""
    try:
        data = resp.json()
    except ValueError:
        return _GENERIC_ERROR
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return _GENERIC_ERROR
