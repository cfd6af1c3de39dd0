"""Profile store adapters — implement the ProfileStore port."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from heartline.domain.profile import UserProfile

logger = logging.getLogger(__name__)


class InMemoryProfileStore:
    """Process-local store; contents are lost on exit."""

    def __init__(self) -> None:
        self._records: dict[str, UserProfile] = {}

    async def get(self, key: str) -> UserProfile | None:
        return self._records.get(key)

    async def put(self, key: str, profile: UserProfile) -> None:
        self._records[key] = profile

    async def delete(self, key: str) -> None:
        self._records.pop(key, None)


class JsonFileProfileStore:
    """Store backed by one JSON document mapping keys to camelCase profiles.

    The whole file is rewritten on every change; there is exactly one
    writer (the local session), so no locking is done.  File access runs
    in a worker thread.  An unreadable document is logged and treated as
    empty; the next write replaces it.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    async def get(self, key: str) -> UserProfile | None:
        raw = (await asyncio.to_thread(self._load)).get(key)
        if raw is None:
            return None
        return UserProfile.model_validate(raw)

    async def put(self, key: str, profile: UserProfile) -> None:
        records = await asyncio.to_thread(self._load)
        records[key] = profile.model_dump(mode="json", by_alias=True, exclude_none=True)
        await asyncio.to_thread(self._save, records)

    async def delete(self, key: str) -> None:
        records = await asyncio.to_thread(self._load)
        if records.pop(key, None) is not None:
            await asyncio.to_thread(self._save, records)

    def _load(self) -> dict[str, dict]:
        if not self._path.exists():
            return {}
        text = self._path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Ignoring profile store %s: invalid JSON (%s)", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring profile store %s: not a JSON object", self._path)
            return {}
        return data

    def _save(self, records: dict[str, dict]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(records, indent=2), encoding="utf-8")
