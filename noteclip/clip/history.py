"""Clip history and usage counters.

History lives in the local backend as a list of entries, newest first,
and is trimmed to a fixed length on every write.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from noteclip.config.defaults import HISTORY_KEY, HISTORY_LIMIT
from noteclip.config.settings import HistoryEntry
from noteclip.storage.base import KeyValueBackend

logger = logging.getLogger("noteclip.history")


def increment(stats: dict[str, int], action: str) -> int:
    """Bump the counter for *action* and return its new value."""
    stats[action] = stats.get(action, 0) + 1
    return stats[action]


def _timestamp() -> str:
    # Millisecond precision with a Z suffix, e.g. 2024-05-01T12:00:00.000Z
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


class HistoryRecorder:
    """Appends clip actions to the bounded history log.

    Usage::

        recorder = HistoryRecorder(local_backend)
        await recorder.add_entry("addToObsidian", "https://example.com", "Example")
        entries = await recorder.get_history()
    """

    __slots__ = ("_backend", "_limit")

    def __init__(self, backend: KeyValueBackend, limit: int = HISTORY_LIMIT) -> None:
        self._backend = backend
        self._limit = limit

    @property
    def limit(self) -> int:
        return self._limit

    async def add_entry(
        self,
        action: str,
        url: str,
        title: Optional[str] = None,
    ) -> HistoryEntry:
        """Record *action* on *url* as the newest history entry."""
        entry = HistoryEntry(datetime=_timestamp(), url=url, action=action, title=title)

        stored = await self._backend.get_value(HISTORY_KEY) or []
        stored.insert(0, entry.to_dict())
        await self._backend.set({HISTORY_KEY: stored[: self._limit]})

        logger.debug("recorded %s for %s", action, url)
        return entry

    async def get_history(self) -> list[HistoryEntry]:
        """Return all entries, newest first."""
        stored = await self._backend.get_value(HISTORY_KEY) or []
        return [HistoryEntry.from_dict(item) for item in stored]

    async def clear(self) -> None:
        await self._backend.remove(HISTORY_KEY)
