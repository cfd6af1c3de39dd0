"""API routes — thin controllers that delegate to the relay use case."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from heartline.domain.entities import GenerationRequest
from heartline.interface.dependencies import get_relay
from heartline.interface.schemas import ChatRequest, ChatResponse, ErrorResponse
from heartline.services.relay import ChatRelayUseCase

router = APIRouter()


async def _read_payload(request: Request) -> dict[str, Any]:
    """Return the JSON body as a dict; anything unreadable counts as empty."""
    try:
        data = await request.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


@router.post(
    "/api/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse, "description": "prompt is missing or empty"},
        500: {"model": ErrorResponse, "description": "Gateway not configured or upstream unreachable"},
    },
)
async def chat(
    request: Request,
    relay: ChatRelayUseCase = Depends(get_relay),
) -> ChatResponse:
    """Forward one prompt to the hosted model and return its text.

    The body is read only after ``get_relay`` has confirmed the upstream is
    configured.  Upstream failures answer with the upstream status.
    """
    body = ChatRequest.model_validate(await _read_payload(request))
    result = await relay.execute(
        GenerationRequest(prompt=body.prompt or "", model=body.model, json_mode=body.json_mode)
    )
    return ChatResponse(content=result.content)
