"""JSON-file backend with async I/O.

The whole store lives in one JSON object on disk, e.g.
``~/.noteclip/sync.json``.  Every write rewrites the file.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Iterable

import aiofiles

from noteclip.storage.base import KeyValueBackend, normalize_keys

logger = logging.getLogger("noteclip.storage")


class JsonFileBackend(KeyValueBackend):
    """Key-value backend persisted as a single JSON file.

    Usage::

        backend = JsonFileBackend(Path("~/.noteclip/sync.json").expanduser())
        await backend.set({"vaults": ["Notes"]})
        data = await backend.get()
    """

    __slots__ = ("_path", "_lock")

    def __init__(self, path: Path) -> None:
        self._path = path
        # Serializes read-modify-write cycles on this file.
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, keys: str | Iterable[str] | None = None) -> dict[str, Any]:
        async with self._lock:
            data = await self._read()
        if keys is None:
            return data
        return {k: data[k] for k in normalize_keys(keys) if k in data}

    async def set(self, items: dict[str, Any]) -> None:
        async with self._lock:
            data = await self._read()
            data.update(items)
            await self._write(data)

    async def remove(self, keys: str | Iterable[str]) -> None:
        async with self._lock:
            data = await self._read()
            changed = False
            for key in normalize_keys(keys):
                if key in data:
                    del data[key]
                    changed = True
            if changed:
                await self._write(data)

    # ── Internals ───────────────────────────────────────────────────

    async def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        async with aiofiles.open(self._path, "r", encoding="utf-8") as f:
            raw = await f.read()
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("ignoring unreadable store %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("ignoring non-object store %s", self._path)
            return {}
        return data

    async def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(data, indent=2, default=str)
        async with aiofiles.open(self._path, "w", encoding="utf-8") as f:
            await f.write(payload)
