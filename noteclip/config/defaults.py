"""Default settings values and storage layout for noteclip."""

from __future__ import annotations

import os
from pathlib import Path

from noteclip.config.models import DEFAULT_INTERPRETER_MODEL

CURRENT_MIGRATION_VERSION = 1
HISTORY_LIMIT = 1000

PROPERTY_TYPES = ("text", "number", "checkbox", "date", "datetime", "multitext")

# Stored groups in the sync backend.
VERSION_KEY = "migrationVersion"
VAULTS_KEY = "vaults"
GENERAL_KEY = "general_settings"
HIGHLIGHTER_KEY = "highlighter_settings"
INTERPRETER_KEY = "interpreter_settings"
PROPERTY_TYPES_KEY = "property_types"
STATS_KEY = "stats"

# Flat top-level fields written before providers existed.
LEGACY_FLAT_KEYS = ("anthropicApiKey", "openaiApiKey", "openaiModel")

# Local backend.
HISTORY_KEY = "history"

# (settings attribute, stored group, stored field) for scalar flags.
FLAG_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("show_more_actions_button", GENERAL_KEY, "showMoreActionsButton"),
    ("beta_features", GENERAL_KEY, "betaFeatures"),
    ("legacy_mode", GENERAL_KEY, "legacyMode"),
    ("silent_open", GENERAL_KEY, "silentOpen"),
    ("highlighter_enabled", HIGHLIGHTER_KEY, "highlighterEnabled"),
    ("always_show_highlights", HIGHLIGHTER_KEY, "alwaysShowHighlights"),
    ("highlight_behavior", HIGHLIGHTER_KEY, "highlightBehavior"),
    ("interpreter_model", INTERPRETER_KEY, "interpreterModel"),
    ("interpreter_enabled", INTERPRETER_KEY, "interpreterEnabled"),
    ("interpreter_auto_run", INTERPRETER_KEY, "interpreterAutoRun"),
    ("default_prompt_context", INTERPRETER_KEY, "defaultPromptContext"),
)

DEFAULT_FLAGS: dict = {
    "show_more_actions_button": False,
    "beta_features": False,
    "legacy_mode": False,
    "silent_open": False,
    "highlighter_enabled": True,
    "always_show_highlights": True,
    "highlight_behavior": "replace-content",  # "replace-content", "highlight-inline", "no-highlights"
    "interpreter_model": DEFAULT_INTERPRETER_MODEL,
    "interpreter_enabled": False,
    "interpreter_auto_run": False,
    "default_prompt_context": "",
}

DEFAULT_STATS: dict[str, int] = {
    "addToObsidian": 0,
    "saveFile": 0,
    "copyToClipboard": 0,
    "share": 0,
}


def data_dir() -> Path:
    """Directory holding the sync and local stores."""
    raw = os.environ.get("NOTECLIP_HOME") or "~/.noteclip"
    return Path(os.path.expanduser(raw))


def sync_store_path() -> Path:
    return data_dir() / "sync.json"


def local_store_path() -> Path:
    return data_dir() / "local.json"
