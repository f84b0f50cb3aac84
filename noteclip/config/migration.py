"""Legacy settings migration.

Older versions of the clipper stored API keys as flat top-level fields
(``openaiApiKey``, ``anthropicApiKey``) or inside ``interpreter_settings``,
and let each model carry its own ``provider`` name, ``baseUrl`` and
``apiKey``.  The current schema keeps providers in their own list and
models point at them through ``providerId``.

Migration runs in two phases: :func:`plan_migration` computes the new
models and providers without touching storage, then :func:`migrate`
commits them together with the ``migrationVersion`` stamp and drops the
flat legacy fields.  Until that commit succeeds the dataset still looks
legacy and will be migrated again on the next load.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from noteclip.config.defaults import (
    CURRENT_MIGRATION_VERSION,
    INTERPRETER_KEY,
    LEGACY_FLAT_KEYS,
    VERSION_KEY,
)
from noteclip.config.models import (
    BUILTIN_PROVIDER_HINTS,
    DEFAULT_PROVIDERS,
    ModelConfig,
    Provider,
    as_dicts,
    default_models,
    default_providers,
)
from noteclip.errors import MigrationError
from noteclip.storage.base import KeyValueBackend

logger = logging.getLogger("noteclip.migration")

_WHITESPACE_RUN = re.compile(r"\s+")


class SettingsShape(enum.Enum):
    """Which schema a stored blob was written with."""

    LEGACY = "legacy"
    CURRENT = "current"


@dataclass
class MigrationResult:
    models: list[ModelConfig] = field(default_factory=list)
    providers: list[Provider] = field(default_factory=list)


# ── Classification ──────────────────────────────────────────────────


def _flat_key_field(provider_id: str) -> str:
    return f"{provider_id}ApiKey"


def _legacy_models(raw: dict[str, Any]) -> list[dict[str, Any]]:
    interpreter = raw.get(INTERPRETER_KEY) or {}
    return list(interpreter.get("models") or [])


def classify(raw: dict[str, Any]) -> SettingsShape:
    """Tell a legacy blob apart from one in the current schema.

    A blob stamped with the current version is always current.  Without
    a stamp, any legacy signal makes it legacy; a blob with no signal at
    all (a fresh install) is current.
    """
    if raw.get(VERSION_KEY) == CURRENT_MIGRATION_VERSION:
        return SettingsShape.CURRENT

    interpreter = raw.get(INTERPRETER_KEY) or {}
    for provider in DEFAULT_PROVIDERS:
        key_field = _flat_key_field(provider.id)
        if raw.get(key_field) or interpreter.get(key_field):
            return SettingsShape.LEGACY

    for model in _legacy_models(raw):
        if model.get("provider") or model.get("apiKey"):
            return SettingsShape.LEGACY

    return SettingsShape.CURRENT


def needs_migration(raw: dict[str, Any]) -> bool:
    """True if *raw* still has to go through :func:`migrate`."""
    return classify(raw) is SettingsShape.LEGACY


# ── Planning ────────────────────────────────────────────────────────


def provider_id_for_name(name: str) -> str:
    """Derive a stable provider ID from a free-text provider name."""
    return _WHITESPACE_RUN.sub("-", name.lower())


def _builtin_for(inline_name: str, model_name: str) -> Provider | None:
    lowered = model_name.lower()
    for provider in DEFAULT_PROVIDERS:
        if inline_name and inline_name == provider.name:
            return provider
        hint = BUILTIN_PROVIDER_HINTS.get(provider.id)
        if hint and hint in lowered:
            return provider
    return None


def plan_migration(raw: dict[str, Any]) -> MigrationResult:
    """Compute migrated models and providers for a legacy blob. Pure."""
    interpreter = raw.get(INTERPRETER_KEY) or {}

    providers = default_providers()
    for provider in providers:
        key_field = _flat_key_field(provider.id)
        provider.api_key = (
            raw.get(key_field) or interpreter.get(key_field) or provider.api_key
        )

    builtin_names = {p.name for p in DEFAULT_PROVIDERS}
    legacy_models = _legacy_models(raw)

    # Keyed by the inline name as written, so repeats collapse to one provider.
    custom: dict[str, Provider] = {}
    for model in legacy_models:
        inline = model.get("provider") or ""
        if not inline or inline in builtin_names or inline in custom:
            continue
        custom[inline] = Provider(
            id=provider_id_for_name(inline),
            name=inline,
            base_url=model.get("baseUrl") or "",
            api_key=model.get("apiKey") or "",
        )
        logger.debug("created custom provider %r", inline)

    models: list[ModelConfig] = []
    for model in legacy_models:
        inline = model.get("provider") or ""
        name = model.get("name") or ""
        builtin = _builtin_for(inline, name)
        if builtin is not None:
            provider_id = builtin.id
        elif inline:
            synthesized = custom.get(inline)
            provider_id = synthesized.id if synthesized else provider_id_for_name(inline)
        else:
            provider_id = ""

        models.append(ModelConfig(
            id=model["id"],
            name=name,
            provider_id=provider_id,
            provider_model_id=model["id"],
            enabled=bool(model.get("enabled", True)),
        ))

    if not models:
        models = default_models()

    return MigrationResult(models=models, providers=providers + list(custom.values()))


# ── Commit ──────────────────────────────────────────────────────────


def _committed_interpreter(raw: dict[str, Any], result: MigrationResult) -> dict[str, Any]:
    interpreter = dict(raw.get(INTERPRETER_KEY) or {})
    for provider in DEFAULT_PROVIDERS:
        interpreter.pop(_flat_key_field(provider.id), None)
    interpreter["models"] = as_dicts(result.models)
    interpreter["providers"] = as_dicts(result.providers)
    return interpreter


async def migrate(raw: dict[str, Any], backend: KeyValueBackend) -> MigrationResult:
    """Migrate a legacy blob and commit the result to *backend*.

    The migrated interpreter group and the version marker are written in
    a single backend call, which is the commit point.  The flat legacy
    fields are removed afterwards.

    Raises:
        MigrationError: if anything fails up to the commit; the version
            marker is then not written and the migration will be retried.
        OSError: or whatever the backend raises when removing the flat
            fields.  The migration is already committed at that point.
    """
    logger.debug("starting models and providers migration")
    try:
        result = plan_migration(raw)
        await backend.set({
            INTERPRETER_KEY: _committed_interpreter(raw, result),
            VERSION_KEY: CURRENT_MIGRATION_VERSION,
        })
    except Exception as exc:
        logger.exception("migration failed")
        raise MigrationError(f"settings migration failed: {exc}") from exc

    await backend.remove(list(LEGACY_FLAT_KEYS))

    logger.debug(
        "migrated %d models and %d providers",
        len(result.models),
        len(result.providers),
    )
    return result
