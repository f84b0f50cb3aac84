"""Tests for the key-value backends."""

import json
from pathlib import Path

import pytest

from noteclip.storage.json_file import JsonFileBackend
from noteclip.storage.memory import MemoryBackend


class TestJsonFileBackend:
    """Tests for the JSON-file backend."""

    @pytest.mark.asyncio
    async def test_missing_file_is_empty(self, tmp_path: Path):
        backend = JsonFileBackend(tmp_path / "sync.json")

        assert await backend.get() == {}
        assert await backend.get_value("vaults", []) == []

    @pytest.mark.asyncio
    async def test_set_get_remove(self, tmp_path: Path):
        path = tmp_path / "nested" / "sync.json"
        backend = JsonFileBackend(path)

        await backend.set({"vaults": ["A"], "stats": {"share": 1}})
        await backend.set({"vaults": ["B"]})

        assert json.loads(path.read_text()) == {"vaults": ["B"], "stats": {"share": 1}}
        assert await backend.get(["vaults", "missing"]) == {"vaults": ["B"]}

        await backend.remove(["stats", "missing"])
        assert await backend.get() == {"vaults": ["B"]}

    @pytest.mark.asyncio
    async def test_unreadable_file_is_empty(self, tmp_path: Path):
        path = tmp_path / "sync.json"
        path.write_text("{not json")

        assert await JsonFileBackend(path).get() == {}

    @pytest.mark.asyncio
    async def test_non_object_file_is_empty(self, tmp_path: Path):
        path = tmp_path / "sync.json"
        path.write_text("[1, 2]")

        assert await JsonFileBackend(path).get() == {}


class TestMemoryBackend:
    @pytest.mark.asyncio
    async def test_values_are_copied(self):
        backend = MemoryBackend()
        vaults = ["A"]

        await backend.set({"vaults": vaults})
        vaults.append("B")
        fetched = await backend.get("vaults")
        fetched["vaults"].append("C")

        assert backend.data == {"vaults": ["A"]}

    @pytest.mark.asyncio
    async def test_remove_single_key(self):
        backend = MemoryBackend({"a": 1, "b": 2})

        await backend.remove("a")

        assert await backend.get() == {"b": 2}
