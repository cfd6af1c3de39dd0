"""Schema-validating decoders for task responses.

Each task's model output is parsed as JSON and validated against a pydantic
payload model.  Anything that does not fit raises
:class:`MalformedResponseError`; no field is ever silently defaulted.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from heartline.domain.entities import SynastryRating, TipCategory
from heartline.domain.exceptions import MalformedResponseError
from heartline.domain.profile import MatchProfile

_PayloadT = TypeVar("_PayloadT", bound=BaseModel)


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Payload shapes ──────────────────────────────────────────────────────────


class CompatibilityItem(_Payload):
    match_id: str
    score: float = Field(ge=0.0, le=1.0)
    explanation: str
    key_factors: list[str]

    @field_validator("match_id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        # Must join against MatchProfile.id, which coerces the same way.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class CompatibilityPayload(_Payload):
    results: list[CompatibilityItem]


class HoroscopePayload(_Payload):
    reading: str = Field(min_length=1)


class SynastryPayload(_Payload):
    compatibility: SynastryRating
    explanation: str = Field(min_length=1)


class IcebreakerPayload(_Payload):
    message: str = Field(min_length=1)


class BioPayload(_Payload):
    bio: str = Field(min_length=1)


class ConsistencyPayload(_Payload):
    score: float = Field(ge=0.0, le=100.0)
    flags: list[str]


class MatchesPayload(_Payload):
    matches: list[MatchProfile]


class TipItem(_Payload):
    id: str
    category: TipCategory
    title: str
    content: str
    emoji: str


class TipsPayload(_Payload):
    tips: list[TipItem]


class InsightPayload(_Payload):
    title: str
    description: str
    strengths: list[str]
    growth_areas: list[str]
    weekly_challenge: str


# ── Decoding ────────────────────────────────────────────────────────────────


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding Markdown code fence, if the model added one."""
    text = raw.strip()
    if text.startswith("```"):
        first_nl = text.index("\n") if "\n" in text else 3
        text = text[first_nl + 1 :]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def decode(task: str, raw: str, payload_type: type[_PayloadT]) -> _PayloadT:
    """Parse *raw* as a single JSON object of *payload_type*.

    Raises :class:`MalformedResponseError` on invalid JSON, a non-object
    top level, or any schema mismatch.
    """
    try:
        data: Any = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(task, f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedResponseError(task, f"expected a JSON object, got {type(data).__name__}")

    try:
        return payload_type.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise MalformedResponseError(task, problems) from exc
