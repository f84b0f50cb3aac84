"""Async settings store over the sync and local key-value backends.

The store owns one :class:`Settings` object.  ``load()`` replaces it from
storage (migrating legacy data first), ``save()`` merges changes into it
and writes it back.  Collaborators get the store injected rather than
reaching for a module-level settings global.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from noteclip.clip.history import HistoryRecorder, increment
from noteclip.config.defaults import (
    CURRENT_MIGRATION_VERSION,
    INTERPRETER_KEY,
    VERSION_KEY,
    local_store_path,
    sync_store_path,
)
from noteclip.config.migration import migrate, needs_migration
from noteclip.config.models import (
    ModelConfig,
    Provider,
    default_models,
    default_providers,
    get_provider,
)
from noteclip.config.settings import HistoryEntry, Settings, parse_property_types
from noteclip.errors import MigrationError
from noteclip.storage.base import KeyValueBackend
from noteclip.storage.json_file import JsonFileBackend

logger = logging.getLogger("noteclip.settings")


class SettingsStore:
    """Loads, caches and saves the clipper settings.

    Usage::

        store = SettingsStore.open()
        settings = await store.load()
        await store.save({"silent_open": True})
    """

    __slots__ = ("_sync", "_local", "_history", "_settings", "_loaded", "_migration_pending")

    def __init__(self, sync_backend: KeyValueBackend, local_backend: KeyValueBackend) -> None:
        self._sync = sync_backend
        self._local = local_backend
        self._history = HistoryRecorder(local_backend)
        self._settings = Settings()
        self._loaded = False
        self._migration_pending = False

    # ── Factory ─────────────────────────────────────────────────────

    @classmethod
    def open(cls, directory: Path | None = None) -> "SettingsStore":
        """Store backed by ``sync.json`` and ``local.json``.

        Files live in *directory*, or in the data directory by default.
        """
        if directory is None:
            return cls(JsonFileBackend(sync_store_path()), JsonFileBackend(local_store_path()))
        return cls(
            JsonFileBackend(directory / "sync.json"),
            JsonFileBackend(directory / "local.json"),
        )

    # ── Persistence ─────────────────────────────────────────────────

    async def load(self) -> Settings:
        """Read settings from storage, migrating legacy data first."""
        data = await self._sync.get()

        migrated = None
        self._migration_pending = False
        if needs_migration(data):
            logger.debug("starting migration")
            try:
                migrated = await migrate(data, self._sync)
            except MigrationError:
                logger.warning("migration failed, using default models for this session")
                self._migration_pending = True
            else:
                logger.debug("migration completed")

        history = await self._history.get_history()
        settings = Settings.from_stored(data, history)

        if migrated is not None:
            settings.models = migrated.models
            settings.providers = migrated.providers
        elif self._migration_pending:
            settings.models = default_models()
            settings.providers = default_providers()

        self._settings = settings
        self._loaded = True
        logger.debug("loaded settings: %r", settings)
        return settings

    async def save(self, partial: Optional[Mapping[str, Any]] = None) -> None:
        """Merge *partial* into the cached settings and write them back.

        Raises:
            KeyError: if *partial* names a field Settings does not have.
        """
        if partial:
            known = Settings.field_names()
            for key, value in partial.items():
                if key not in known:
                    raise KeyError(f"Unknown setting: {key}")
                setattr(self._settings, key, _coerce(key, value))

        groups = self._settings.projection()
        if self._migration_pending:
            # The stored interpreter group still holds the legacy keys and
            # models the next migration attempt needs.
            del groups[INTERPRETER_KEY]
        elif self._loaded:
            # A store that was never loaded may still hold legacy data.
            groups[VERSION_KEY] = CURRENT_MIGRATION_VERSION
        await self._sync.set(groups)

    async def reset(self) -> Settings:
        """Overwrite stored settings with defaults. History is kept."""
        self._settings = Settings(history=list(self._settings.history))
        self._loaded = True
        self._migration_pending = False
        await self.save()
        return self._settings

    # ── Accessors ───────────────────────────────────────────────────

    @property
    def settings(self) -> Settings:
        """The cached settings object (replaced on every load)."""
        return self._settings

    @property
    def history(self) -> HistoryRecorder:
        return self._history

    @property
    def migration_pending(self) -> bool:
        """True if the last load hit a migration failure."""
        return self._migration_pending

    def property_type(self, name: str) -> str:
        """Declared type of property *name*, ``text`` if undeclared."""
        return self._settings.property_types.get(name, "text")

    def provider_for(self, model: ModelConfig) -> Optional[Provider]:
        """The provider a model points at, or None if it does not resolve."""
        if not model.provider_id:
            return None
        return get_provider(self._settings.providers, model.provider_id)

    # ── Helpers ─────────────────────────────────────────────────────

    async def set_legacy_mode(self, enabled: bool) -> None:
        await self.save({"legacy_mode": enabled})
        logger.info("legacy mode %s", "enabled" if enabled else "disabled")

    async def increment_stat(
        self,
        action: str,
        url: Optional[str] = None,
        title: Optional[str] = None,
    ) -> Optional[HistoryEntry]:
        """Count one *action* and, when the page URL is known, log it."""
        settings = await self.load()
        increment(settings.stats, action)
        await self.save()

        if url:
            entry = await self._history.add_entry(action, url, title)
            settings.history.insert(0, entry)
            del settings.history[self._history.limit:]
            return entry
        return None

    async def get_local(self, key: str, default: Any = None) -> Any:
        """Read a local-only UI-state value, e.g. ``lastSelectedVault``."""
        return await self._local.get_value(key, default)

    async def set_local(self, key: str, value: Any) -> None:
        await self._local.set({key: value})

    async def dump(self, key: Optional[str] = None) -> dict[str, Any]:
        """Raw contents of the sync backend, or of a single key."""
        return await self._sync.get(key)


def _coerce(field_name: str, value: Any) -> Any:
    """Turn stored-shape values (plain dicts) into their Settings types."""
    if field_name == "models":
        return [m if isinstance(m, ModelConfig) else ModelConfig.from_dict(m) for m in value]
    if field_name == "providers":
        return [p if isinstance(p, Provider) else Provider.from_dict(p) for p in value]
    if field_name == "property_types":
        return parse_property_types(value)
    if field_name == "history":
        return [e if isinstance(e, HistoryEntry) else HistoryEntry.from_dict(e) for e in value]
    return value
