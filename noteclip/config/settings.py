"""The Settings object and its mapping to the stored layout."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Any, Optional

from noteclip.config.defaults import (
    DEFAULT_FLAGS,
    DEFAULT_STATS,
    FLAG_FIELDS,
    INTERPRETER_KEY,
    PROPERTY_TYPES_KEY,
    STATS_KEY,
    VAULTS_KEY,
)
from noteclip.config.models import (
    ModelConfig,
    Provider,
    as_dicts,
    default_models,
    default_providers,
)

# Flags where an empty stored string means "use the default".
_BLANK_IS_DEFAULT = frozenset({"interpreter_model", "default_prompt_context"})


@dataclass
class HistoryEntry:
    """One recorded clip action."""

    datetime: str
    url: str
    action: str
    title: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "datetime": self.datetime,
            "url": self.url,
            "action": self.action,
        }
        if self.title is not None:
            data["title"] = self.title
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        return cls(
            datetime=data.get("datetime", ""),
            url=data.get("url", ""),
            action=data.get("action", ""),
            title=data.get("title"),
        )


@dataclass
class Settings:
    """Effective configuration of the clipper."""

    vaults: list[str] = field(default_factory=list)
    models: list[ModelConfig] = field(default_factory=default_models)
    providers: list[Provider] = field(default_factory=default_providers)
    property_types: dict[str, str] = field(default_factory=dict)
    stats: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_STATS))
    history: list[HistoryEntry] = field(default_factory=list)

    show_more_actions_button: bool = DEFAULT_FLAGS["show_more_actions_button"]
    beta_features: bool = DEFAULT_FLAGS["beta_features"]
    legacy_mode: bool = DEFAULT_FLAGS["legacy_mode"]
    silent_open: bool = DEFAULT_FLAGS["silent_open"]
    highlighter_enabled: bool = DEFAULT_FLAGS["highlighter_enabled"]
    always_show_highlights: bool = DEFAULT_FLAGS["always_show_highlights"]
    highlight_behavior: str = DEFAULT_FLAGS["highlight_behavior"]
    interpreter_model: str = DEFAULT_FLAGS["interpreter_model"]
    interpreter_enabled: bool = DEFAULT_FLAGS["interpreter_enabled"]
    interpreter_auto_run: bool = DEFAULT_FLAGS["interpreter_auto_run"]
    default_prompt_context: str = DEFAULT_FLAGS["default_prompt_context"]

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    # ── Stored layout ───────────────────────────────────────────────

    @classmethod
    def from_stored(
        cls,
        data: dict[str, Any],
        history: list[HistoryEntry] | None = None,
    ) -> "Settings":
        """Build settings from a raw sync-backend blob.

        Each field takes the stored value when present, else its default.
        """
        settings = cls(history=list(history or []))

        vaults = data.get(VAULTS_KEY)
        if vaults is not None:
            settings.vaults = list(vaults)

        for attr, group, key in FLAG_FIELDS:
            value = (data.get(group) or {}).get(key)
            if value is None or (attr in _BLANK_IS_DEFAULT and not value):
                continue
            setattr(settings, attr, value)

        interpreter = data.get(INTERPRETER_KEY) or {}
        if interpreter.get("models") is not None:
            settings.models = [ModelConfig.from_dict(m) for m in interpreter["models"]]
        if interpreter.get("providers") is not None:
            settings.providers = [Provider.from_dict(p) for p in interpreter["providers"]]

        types = data.get(PROPERTY_TYPES_KEY)
        if types is not None:
            settings.property_types = parse_property_types(types)

        stats = data.get(STATS_KEY)
        if stats is not None:
            settings.stats = {**DEFAULT_STATS, **stats}

        return settings

    def projection(self) -> dict[str, Any]:
        """The groups written to the sync backend. History is not included."""
        groups: dict[str, Any] = {VAULTS_KEY: list(self.vaults)}
        for attr, group, key in FLAG_FIELDS:
            groups.setdefault(group, {})[key] = getattr(self, attr)
        groups[INTERPRETER_KEY]["models"] = as_dicts(self.models)
        groups[INTERPRETER_KEY]["providers"] = as_dicts(self.providers)
        groups[PROPERTY_TYPES_KEY] = [
            {"name": name, "type": type_} for name, type_ in self.property_types.items()
        ]
        groups[STATS_KEY] = dict(self.stats)
        return groups

    def copy(self) -> "Settings":
        return copy.deepcopy(self)


def parse_property_types(raw: Any) -> dict[str, str]:
    """Accept the stored list shape or a plain name -> type mapping."""
    if isinstance(raw, dict):
        return {str(k): str(v) for k, v in raw.items()}
    result: dict[str, str] = {}
    for item in raw:
        name = item.get("name")
        if name:
            result[name] = item.get("type") or "text"
    return result
