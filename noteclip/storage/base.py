"""Key-value backend abstraction.

A backend holds a flat mapping of string keys to JSON-compatible values.
The settings store talks to two of them: a synchronized one for settings
and a local-only one for history and UI state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable


class KeyValueBackend(ABC):
    """Abstract durable key-value store."""

    @abstractmethod
    async def get(self, keys: str | Iterable[str] | None = None) -> dict[str, Any]:
        """Return the stored items for *keys*, or everything when None.

        Missing keys are simply absent from the result.
        """
        ...

    @abstractmethod
    async def set(self, items: dict[str, Any]) -> None:
        """Store every item in *items*, replacing existing values."""
        ...

    @abstractmethod
    async def remove(self, keys: str | Iterable[str]) -> None:
        """Delete *keys*; unknown keys are ignored."""
        ...

    async def get_value(self, key: str, default: Any = None) -> Any:
        """Convenience accessor for a single key."""
        result = await self.get(key)
        return result.get(key, default)


def normalize_keys(keys: str | Iterable[str]) -> list[str]:
    if isinstance(keys, str):
        return [keys]
    return list(keys)
