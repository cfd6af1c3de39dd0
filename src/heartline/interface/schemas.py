"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request body for ``POST /api/chat``.

    ``prompt`` is optional here so that a missing prompt is reported by the
    relay as ``prompt is required.`` rather than as a schema error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    prompt: str | None = None
    model: str | None = None
    json_mode: bool = Field(default=False, alias="jsonMode")


class ChatResponse(BaseModel):
    """Successful response from ``POST /api/chat``."""

    content: str


class ErrorResponse(BaseModel):
    """Error envelope returned on all failure paths."""

    error: str
