"""Settings system: async store, legacy migration and built-in defaults."""

from noteclip.config.migration import migrate, needs_migration
from noteclip.config.models import DEFAULT_MODELS, DEFAULT_PROVIDERS, ModelConfig, Provider
from noteclip.config.settings import HistoryEntry, Settings
from noteclip.config.store import SettingsStore

__all__ = [
    "SettingsStore",
    "Settings",
    "HistoryEntry",
    "ModelConfig",
    "Provider",
    "DEFAULT_MODELS",
    "DEFAULT_PROVIDERS",
    "migrate",
    "needs_migration",
]
