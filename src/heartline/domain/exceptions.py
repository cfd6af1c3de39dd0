"""Domain exception hierarchy.

Gateway exceptions carry the HTTP status code the interface layer answers
with.  Client-side exceptions (transport, decoding, session) propagate to
the calling action, which decides how to surface them.
"""

from __future__ import annotations


class HeartlineError(Exception):
    """Base exception for the entire application."""


# ── Model Gateway ───────────────────────────────────────────────────────────


class GatewayError(HeartlineError):
    """An error the Gateway answers with a specific HTTP status."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class GatewayNotConfiguredError(GatewayError):
    """The upstream endpoint or credential is missing."""

    def __init__(self) -> None:
        super().__init__("Azure OpenAI is not configured.", 500)


class PromptRequiredError(GatewayError):
    """The request body carries no usable prompt."""

    def __init__(self) -> None:
        super().__init__("prompt is required.", 400)


class UpstreamError(GatewayError):
    """The model provider answered with a non-success status."""

    def __init__(self, status_code: int, body_text: str) -> None:
        super().__init__(f"Azure OpenAI error: {body_text}", status_code)
        self.body_text = body_text


class UpstreamUnavailableError(GatewayError):
    """The upstream call raised before producing a response."""

    def __init__(self, message: str) -> None:
        super().__init__(message or "Internal server error", 500)


# ── LLM client facade ───────────────────────────────────────────────────────


class TransportError(HeartlineError):
    """A transport failed to produce response text."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(HeartlineError):
    """Model output is not valid JSON or does not match the task's shape."""

    def __init__(self, task: str, detail: str) -> None:
        super().__init__(f"Malformed {task} response: {detail}")
        self.task = task


# ── Matching session ────────────────────────────────────────────────────────


class SessionError(HeartlineError):
    """The requested session operation is not allowed in the current state."""


class SessionBusyError(SessionError):
    """Matches are already being loaded."""
