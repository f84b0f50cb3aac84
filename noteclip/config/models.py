"""Provider and model definitions.

The built-in catalog is what a fresh install starts with and what the
migration falls back to when a legacy dataset carries no models at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Optional


@dataclass
class Provider:
    """A named API endpoint configuration."""

    id: str
    name: str
    base_url: str = ""
    api_key: str = field(default="", repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "baseUrl": self.base_url,
            "apiKey": self.api_key,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Provider":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            base_url=data.get("baseUrl") or "",
            api_key=data.get("apiKey") or "",
        )


@dataclass
class ModelConfig:
    """A model offering bound to one provider."""

    id: str
    name: str
    provider_id: str = ""
    provider_model_id: str = ""
    enabled: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "providerId": self.provider_id,
            "providerModelId": self.provider_model_id,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ModelConfig":
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            provider_id=data.get("providerId") or "",
            provider_model_id=data.get("providerModelId") or data.get("id", ""),
            enabled=bool(data.get("enabled", True)),
        )


# ── Built-in catalog ────────────────────────────────────────────────

DEFAULT_PROVIDERS: tuple[Provider, ...] = (
    Provider(
        id="openai",
        name="OpenAI",
        base_url="https://api.openai.com/v1/chat/completions",
    ),
    Provider(
        id="anthropic",
        name="Anthropic",
        base_url="https://api.anthropic.com/v1/messages",
    ),
)

DEFAULT_MODELS: tuple[ModelConfig, ...] = (
    ModelConfig("gpt-4o-mini", "GPT-4o Mini", "openai", "gpt-4o-mini"),
    ModelConfig("gpt-4o", "GPT-4o", "openai", "gpt-4o"),
    ModelConfig(
        "claude-3-5-sonnet-latest",
        "Claude 3.5 Sonnet",
        "anthropic",
        "claude-3-5-sonnet-latest",
    ),
    ModelConfig(
        "claude-3-5-haiku-latest",
        "Claude 3.5 Haiku",
        "anthropic",
        "claude-3-5-haiku-latest",
    ),
)

# Case-insensitive model-name fragment that identifies a built-in vendor.
BUILTIN_PROVIDER_HINTS: dict[str, str] = {
    "openai": "gpt",
    "anthropic": "claude",
}

DEFAULT_INTERPRETER_MODEL = "gpt-4o-mini"


def default_providers() -> list[Provider]:
    """Fresh, mutable copies of the built-in providers."""
    return [replace(p) for p in DEFAULT_PROVIDERS]


def default_models() -> list[ModelConfig]:
    """Fresh, mutable copies of the built-in models."""
    return [replace(m) for m in DEFAULT_MODELS]


def get_provider(providers: Iterable[Provider], provider_id: str) -> Optional[Provider]:
    """Look up a provider by its ID."""
    for p in providers:
        if p.id == provider_id:
            return p
    return None


def get_model(models: Iterable[ModelConfig], model_id: str) -> Optional[ModelConfig]:
    """Look up a model by its ID."""
    for m in models:
        if m.id == model_id:
            return m
    return None


def as_dicts(items: Iterable[Provider | ModelConfig]) -> list[dict[str, Any]]:
    """Serialize providers or models to the stored (camelCase) shape."""
    return [item.to_dict() for item in items]
