"""In-memory backend, used for tests and throwaway sessions."""

from __future__ import annotations

import copy
from typing import Any, Iterable

from noteclip.storage.base import KeyValueBackend, normalize_keys


class MemoryBackend(KeyValueBackend):
    """Backend that keeps its data in a dict.

    Values are deep-copied on the way in and out so callers can never
    mutate stored state by accident, matching a real serializing store.
    """

    __slots__ = ("_data",)

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(data) if data else {}

    async def get(self, keys: str | Iterable[str] | None = None) -> dict[str, Any]:
        if keys is None:
            return copy.deepcopy(self._data)
        return {
            k: copy.deepcopy(self._data[k])
            for k in normalize_keys(keys)
            if k in self._data
        }

    async def set(self, items: dict[str, Any]) -> None:
        for key, value in items.items():
            self._data[key] = copy.deepcopy(value)

    async def remove(self, keys: str | Iterable[str]) -> None:
        for key in normalize_keys(keys):
            self._data.pop(key, None)

    @property
    def data(self) -> dict[str, Any]:
        """The raw backing dict."""
        return self._data
