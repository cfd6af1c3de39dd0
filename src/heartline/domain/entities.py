"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from heartline.domain.profile import MatchProfile


class TipCategory(str, Enum):
    """Bucket a dating tip belongs to."""

    CONVERSATION = "conversation"
    FIRST_DATE = "firstDate"
    RELATIONSHIP = "relationship"
    SELF_GROWTH = "selfGrowth"


class SynastryRating(str, Enum):
    """Overall rating of a synastry reading."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    MODERATE = "Moderate"
    CHALLENGING = "Challenging"


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    """One prompt call, built per request and never stored."""

    prompt: str
    model: str | None = None
    json_mode: bool = False


@dataclass(frozen=True, slots=True)
class GenerationResponse:
    """Raw model text returned by a transport."""

    content: str


@dataclass(frozen=True, slots=True)
class CompatibilityResult:
    """Compatibility of the user with a single candidate match."""

    match_id: str
    score: float  # 0.0 – 1.0
    explanation: str
    key_factors: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ConsistencyResult:
    """Outcome of the profile-consistency analysis."""

    score: float  # 0 – 100
    flags: list[str] = field(default_factory=list)
    passed: bool = True


@dataclass(frozen=True, slots=True)
class HoroscopeReading:
    date: str
    sign: str
    reading: str


@dataclass(frozen=True, slots=True)
class SynastryReading:
    user_sign: str
    match_sign: str
    compatibility: SynastryRating
    explanation: str


@dataclass(frozen=True, slots=True)
class DatingTip:
    id: str
    category: TipCategory
    title: str
    content: str
    emoji: str


@dataclass(frozen=True, slots=True)
class RelationshipInsight:
    title: str
    description: str
    strengths: list[str]
    growth_areas: list[str]
    weekly_challenge: str


@dataclass(frozen=True, slots=True)
class QualifiedMatch:
    """A candidate profile paired with the result that qualified it."""

    match: MatchProfile
    compatibility: CompatibilityResult
