"""Pytest configuration and fixtures for noteclip tests."""

from pathlib import Path

import pytest

from noteclip.config.store import SettingsStore
from noteclip.storage.memory import MemoryBackend


class FailingBackend(MemoryBackend):
    """Memory backend whose writes fail, to exercise error paths."""

    async def set(self, items):
        raise OSError("disk full")


@pytest.fixture
def sync_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def local_backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(sync_backend: MemoryBackend, local_backend: MemoryBackend) -> SettingsStore:
    """A settings store over empty in-memory backends."""
    return SettingsStore(sync_backend, local_backend)


@pytest.fixture
def data_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point NOTECLIP_HOME at a temporary directory.

    Returns:
        Path to the data directory
    """
    monkeypatch.setenv("NOTECLIP_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def legacy_data() -> dict:
    """Sync storage as written before providers were introduced.

    Returns:
        Dictionary in the legacy layout
    """
    return {
        "vaults": ["Personal", "Work"],
        "openaiApiKey": "sk-openai-flat",
        "openaiModel": "gpt-4o",
        "general_settings": {"silentOpen": True},
        "interpreter_settings": {
            "anthropicApiKey": "sk-ant-nested",
            "interpreterModel": "llama3",
            "models": [
                {"id": "gpt-4o", "name": "GPT-4o", "provider": "OpenAI", "enabled": True},
                {
                    "id": "llama3",
                    "name": "Llama 3",
                    "provider": "My Ollama",
                    "baseUrl": "http://localhost:11434/v1/chat/completions",
                    "apiKey": "ollama-key",
                    "enabled": True,
                },
                {
                    "id": "mistral",
                    "name": "Mistral",
                    "provider": "My Ollama",
                    "baseUrl": "http://elsewhere/v1",
                    "enabled": False,
                },
                {"id": "claude-3-opus", "name": "Claude 3 Opus", "enabled": True},
            ],
        },
    }


@pytest.fixture
def failing_backend() -> FailingBackend:
    return FailingBackend()
