"""Compatibility pipeline — filter, rank and pair scored matches.

Pure functions; no I/O.  The same threshold decides which matches are
shown and whether chat with a match is unlocked.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from heartline.domain.entities import CompatibilityResult, QualifiedMatch
from heartline.domain.profile import MatchProfile

logger = logging.getLogger(__name__)

CHAT_UNLOCK_THRESHOLD = 0.70


def is_chat_unlocked(result: CompatibilityResult) -> bool:
    """True when *result* clears the chat-unlock threshold."""
    return result.score >= CHAT_UNLOCK_THRESHOLD


def qualify(results: Iterable[CompatibilityResult]) -> list[CompatibilityResult]:
    """Keep qualifying results, best score first.

    ``sorted`` is stable, so equal scores keep their incoming order.
    """
    kept = [r for r in results if is_chat_unlocked(r)]
    return sorted(kept, key=lambda r: r.score, reverse=True)


def pair_with_profiles(
    results: Iterable[CompatibilityResult], matches: Sequence[MatchProfile]
) -> list[QualifiedMatch]:
    """Join each result to the match whose ``id`` equals its ``match_id``.

    Result order is preserved; results with no matching profile are dropped.
    """
    by_id: dict[str, MatchProfile] = {}
    for match in matches:
        by_id.setdefault(match.id, match)

    paired: list[QualifiedMatch] = []
    for result in results:
        match = by_id.get(result.match_id)
        if match is None:
            logger.debug("Dropping result for unknown match %r", result.match_id)
            continue
        paired.append(QualifiedMatch(match=match, compatibility=result))
    return paired


def rank_matches(
    results: Sequence[CompatibilityResult], matches: Sequence[MatchProfile]
) -> list[QualifiedMatch]:
    """Qualify, sort and pair *results* in one pass."""
    qualified = qualify(results)
    paired = pair_with_profiles(qualified, matches)
    logger.info(
        "Ranked matches: candidates=%d qualified=%d paired=%d",
        len(results),
        len(qualified),
        len(paired),
    )
    return paired
