"""LLM client facade and the dating task adapters built on it.

:class:`LlmFacade` turns "prompt in, text out" into one call regardless of
the transport chosen at startup.  :class:`DatingAssistant` wraps every
domain task: build the prompt, call the facade in JSON mode, decode the
answer into typed results.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from heartline.domain.entities import (
    CompatibilityResult,
    ConsistencyResult,
    DatingTip,
    GenerationRequest,
    HoroscopeReading,
    RelationshipInsight,
    SynastryReading,
)
from heartline.domain.ports.llm_transport import LlmTransport
from heartline.domain.profile import MatchProfile, UserProfile
from heartline.domain.value_objects import ZodiacSign
from heartline.services import decoders, prompts

logger = logging.getLogger(__name__)

ANALYSIS_MODEL = "gpt-4o"
FAST_MODEL = "gpt-4o-mini"

CONSISTENCY_PASS_SCORE = 70


class LlmFacade:
    """Uniform asynchronous prompt call over a single transport."""

    def __init__(self, transport: LlmTransport) -> None:
        self._transport = transport

    @property
    def transport(self) -> LlmTransport:
        return self._transport

    async def generate(
        self,
        prompt: str,
        model: str | None = None,
        *,
        json_mode: bool = False,
        task: str = "prompt",
    ) -> str:
        """Send *prompt* and return the raw response text."""
        logger.info(
            "LLM call: task=%s model=%s transport=%s",
            task,
            model or "default",
            type(self._transport).__name__,
        )
        response = await self._transport.generate(
            GenerationRequest(prompt=prompt, model=model, json_mode=json_mode)
        )
        return response.content


class DatingAssistant:
    """Task adapters: compatibility, astrology, icebreakers, bios, profiles.

    Every task runs in JSON mode and decodes through a schema-validating
    step, so a malformed model answer always surfaces as
    :class:`~heartline.domain.exceptions.MalformedResponseError`.  This
    includes the consistency analysis, which never falls back to a
    passing result.
    """

    def __init__(self, facade: LlmFacade) -> None:
        self._llm = facade

    async def _ask(self, task: str, prompt: str, model: str) -> str:
        return await self._llm.generate(prompt, model, json_mode=True, task=task)

    # ── Matching ────────────────────────────────────────────────────────

    async def calculate_compatibility(
        self, user: UserProfile, matches: Sequence[MatchProfile]
    ) -> list[CompatibilityResult]:
        """Score *user* against every match; one result per scored match."""
        raw = await self._ask(
            "compatibility", prompts.compatibility_prompt(user, matches), ANALYSIS_MODEL
        )
        payload = decoders.decode("compatibility", raw, decoders.CompatibilityPayload)
        return [
            CompatibilityResult(
                match_id=item.match_id,
                score=float(item.score),
                explanation=item.explanation,
                key_factors=list(item.key_factors),
            )
            for item in payload.results
        ]

    async def generate_match_profiles(
        self, user: UserProfile, count: int = 6
    ) -> list[MatchProfile]:
        """Invent *count* candidate profiles for *user*."""
        raw = await self._ask(
            "matches", prompts.match_profiles_prompt(user, count), ANALYSIS_MODEL
        )
        return decoders.decode("matches", raw, decoders.MatchesPayload).matches

    # ── Astrology ───────────────────────────────────────────────────────

    async def generate_daily_horoscope(
        self, birth_date: str, today: date | None = None
    ) -> HoroscopeReading:
        sign = ZodiacSign.from_birth_date(birth_date)
        raw = await self._ask(
            "horoscope", prompts.horoscope_prompt(birth_date, sign), FAST_MODEL
        )
        payload = decoders.decode("horoscope", raw, decoders.HoroscopePayload)
        return HoroscopeReading(
            date=(today or date.today()).isoformat(),
            sign=sign.value,
            reading=payload.reading,
        )

    async def generate_synastry(
        self, user_birth_date: str, match_birth_date: str
    ) -> SynastryReading:
        user_sign = ZodiacSign.from_birth_date(user_birth_date)
        match_sign = ZodiacSign.from_birth_date(match_birth_date)
        raw = await self._ask(
            "synastry",
            prompts.synastry_prompt(user_birth_date, user_sign, match_birth_date, match_sign),
            FAST_MODEL,
        )
        payload = decoders.decode("synastry", raw, decoders.SynastryPayload)
        return SynastryReading(
            user_sign=user_sign.value,
            match_sign=match_sign.value,
            compatibility=payload.compatibility,
            explanation=payload.explanation,
        )

    # ── Profile text ────────────────────────────────────────────────────

    async def generate_icebreaker(self, user: UserProfile, match: MatchProfile) -> str:
        raw = await self._ask(
            "icebreaker", prompts.icebreaker_prompt(user, match), FAST_MODEL
        )
        return decoders.decode("icebreaker", raw, decoders.IcebreakerPayload).message

    async def generate_bio(self, profile: UserProfile) -> str:
        raw = await self._ask("bio", prompts.bio_prompt(profile), FAST_MODEL)
        return decoders.decode("bio", raw, decoders.BioPayload).bio

    async def analyze_consistency(self, profile: UserProfile) -> ConsistencyResult:
        """Judge how coherent the questionnaire answers are (0-100)."""
        raw = await self._ask(
            "consistency", prompts.consistency_prompt(profile), FAST_MODEL
        )
        payload = decoders.decode("consistency", raw, decoders.ConsistencyPayload)
        return ConsistencyResult(
            score=float(payload.score),
            flags=list(payload.flags),
            passed=payload.score >= CONSISTENCY_PASS_SCORE,
        )

    # ── Insights ────────────────────────────────────────────────────────

    async def generate_dating_tips(
        self, profile: UserProfile, count: int = 4
    ) -> list[DatingTip]:
        raw = await self._ask(
            "tips", prompts.dating_tips_prompt(profile, count), FAST_MODEL
        )
        payload = decoders.decode("tips", raw, decoders.TipsPayload)
        return [
            DatingTip(
                id=tip.id,
                category=tip.category,
                title=tip.title,
                content=tip.content,
                emoji=tip.emoji,
            )
            for tip in payload.tips
        ]

    async def generate_relationship_insight(self, profile: UserProfile) -> RelationshipInsight:
        raw = await self._ask(
            "insight", prompts.relationship_insight_prompt(profile), FAST_MODEL
        )
        payload = decoders.decode("insight", raw, decoders.InsightPayload)
        return RelationshipInsight(
            title=payload.title,
            description=payload.description,
            strengths=list(payload.strengths),
            growth_areas=list(payload.growth_areas),
            weekly_challenge=payload.weekly_challenge,
        )
