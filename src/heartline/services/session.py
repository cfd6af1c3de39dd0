"""Matching session — the profile → matches flow for one local user.

State is derived from a handful of flags rather than stored, so an edit in
progress never throws away matches that were already computed::

    NO_PROFILE → EDITING_PROFILE → PROFILE_SUBMITTED → MATCHES_LOADING
               → MATCHES_READY | MATCHES_EMPTY

Only one load may be in flight at a time; nothing is cancellable.
"""

from __future__ import annotations

import logging
from enum import Enum

from heartline.domain.entities import CompatibilityResult, ConsistencyResult, QualifiedMatch
from heartline.domain.exceptions import SessionBusyError, SessionError
from heartline.domain.ports.profile_store import PROFILE_KEY, ProfileStore
from heartline.domain.profile import MatchProfile, UserProfile
from heartline.services.assistant import DatingAssistant
from heartline.services.matching import rank_matches

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    NO_PROFILE = "no_profile"
    EDITING_PROFILE = "editing_profile"
    PROFILE_SUBMITTED = "profile_submitted"
    MATCHES_LOADING = "matches_loading"
    MATCHES_READY = "matches_ready"
    MATCHES_EMPTY = "matches_empty"


class MatchingSession:
    """Orchestrates profile submission, consistency analysis and matching."""

    def __init__(
        self,
        store: ProfileStore,
        assistant: DatingAssistant,
        match_count: int = 6,
    ) -> None:
        self._store = store
        self._assistant = assistant
        self._match_count = match_count

        self._profile: UserProfile | None = None
        self._candidates: list[MatchProfile] = []
        self._results: list[CompatibilityResult] = []
        self._matches: list[QualifiedMatch] = []
        self._editing = False
        self._submitting = False
        self._loading = False

    # ── Read-only views ─────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        if self._submitting:
            return SessionState.PROFILE_SUBMITTED
        if self._editing:
            return SessionState.EDITING_PROFILE
        if self._profile is None:
            return SessionState.NO_PROFILE
        if self._loading:
            return SessionState.MATCHES_LOADING
        if self._matches:
            return SessionState.MATCHES_READY
        return SessionState.MATCHES_EMPTY

    @property
    def profile(self) -> UserProfile | None:
        return self._profile

    @property
    def candidates(self) -> list[MatchProfile]:
        """Every generated candidate, qualified or not."""
        return list(self._candidates)

    @property
    def results(self) -> list[CompatibilityResult]:
        return list(self._results)

    @property
    def matches(self) -> list[QualifiedMatch]:
        """Qualified matches, best first."""
        return list(self._matches)

    @property
    def is_loading(self) -> bool:
        return self._loading

    # ── Transitions ─────────────────────────────────────────────────────

    async def restore(self) -> SessionState:
        """Load the persisted profile and, when there is one, its matches."""
        self._profile = await self._store.get(PROFILE_KEY)
        if self._profile is None:
            logger.info("Session restored without a profile")
            return self.state
        logger.info("Session restored profile for %s", self._profile.name)
        await self.load_matches()
        return self.state

    def begin_editing(self) -> None:
        """Open the profile editor; computed matches are kept."""
        self._editing = True
        logger.info("Session state: %s", self.state.value)

    def cancel_editing(self) -> None:
        self._editing = False
        logger.info("Session state: %s", self.state.value)

    async def submit_profile(self, profile: UserProfile) -> ConsistencyResult:
        """Analyse, persist and match *profile*.

        A failed consistency analysis propagates and leaves the session in
        the editor with nothing stored.
        """
        if self._submitting:
            raise SessionBusyError("A profile submission is already in progress.")
        if self._loading:
            raise SessionBusyError("Matches are already loading.")

        self._editing = False
        self._submitting = True
        logger.info("Session state: %s", self.state.value)
        try:
            consistency = await self._assistant.analyze_consistency(profile)
        except Exception:
            self._editing = True
            raise
        finally:
            self._submitting = False

        profile = profile.model_copy(
            update={
                "authenticity_score": consistency.score,
                "consistency_flags": list(consistency.flags),
            }
        )
        await self._store.put(PROFILE_KEY, profile)
        self._profile = profile
        logger.info(
            "Profile stored: consistency=%.0f passed=%s flags=%d",
            consistency.score,
            consistency.passed,
            len(consistency.flags),
        )

        await self.load_matches()
        return consistency

    async def load_matches(self) -> list[QualifiedMatch]:
        """Generate candidates, score them and keep the qualified ones.

        On failure the previous matches stay in place and the error
        propagates to the caller.
        """
        if self._profile is None:
            raise SessionError("No profile to match against.")
        if self._loading:
            raise SessionBusyError("Matches are already loading.")

        profile = self._profile
        self._loading = True
        logger.info("Session state: %s", self.state.value)
        try:
            candidates = await self._assistant.generate_match_profiles(
                profile, self._match_count
            )
            results: list[CompatibilityResult] = []
            if candidates:
                results = await self._assistant.calculate_compatibility(profile, candidates)
            ranked = rank_matches(results, candidates)
        finally:
            self._loading = False

        self._candidates = candidates
        self._results = results
        self._matches = ranked
        logger.info("Session state: %s (%d matches)", self.state.value, len(ranked))
        return self.matches

    async def delete_profile(self) -> None:
        """Forget the profile and everything computed from it."""
        await self._store.delete(PROFILE_KEY)
        self._profile = None
        self._candidates = []
        self._results = []
        self._matches = []
        self._editing = False
        logger.info("Session state: %s", self.state.value)
