"""Port: profile store — the single persisted record holding the user's profile."""

from __future__ import annotations

from typing import Protocol

from heartline.domain.profile import UserProfile

PROFILE_KEY = "user-profile"


class ProfileStore(Protocol):
    """Key/value persistence for profiles; records are replaced wholesale."""

    async def get(self, key: str) -> UserProfile | None:
        """Return the stored profile, or ``None`` when absent."""
        ...

    async def put(self, key: str, profile: UserProfile) -> None:
        """Replace the record under *key*."""
        ...

    async def delete(self, key: str) -> None:
        """Remove the record under *key* (no-op when absent)."""
        ...
