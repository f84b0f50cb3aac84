"""Tests for the clip history recorder and usage counters."""

import re

import pytest

from noteclip.clip.history import HistoryRecorder, increment
from noteclip.config.defaults import HISTORY_KEY, HISTORY_LIMIT
from noteclip.storage.memory import MemoryBackend


class TestHistoryRecorder:
    """Tests for HistoryRecorder."""

    @pytest.mark.asyncio
    async def test_newest_entry_first(self, local_backend):
        recorder = HistoryRecorder(local_backend)

        await recorder.add_entry("share", "https://one.example")
        await recorder.add_entry("saveFile", "https://two.example", "Two")

        history = await recorder.get_history()
        assert [e.url for e in history] == ["https://two.example", "https://one.example"]
        assert history[0].title == "Two"
        assert history[1].title is None

    @pytest.mark.asyncio
    async def test_trimmed_to_limit(self, local_backend):
        recorder = HistoryRecorder(local_backend, limit=5)

        for i in range(8):
            await recorder.add_entry("share", f"https://{i}.example")

        history = await recorder.get_history()
        assert len(history) == 5
        assert history[0].url == "https://7.example"
        assert history[-1].url == "https://3.example"

    @pytest.mark.asyncio
    async def test_full_history_drops_oldest(self):
        full = [
            {"datetime": "2024-01-01T00:00:00.000Z", "url": f"https://{i}.example", "action": "share"}
            for i in range(HISTORY_LIMIT)
        ]
        backend = MemoryBackend({HISTORY_KEY: full})
        recorder = HistoryRecorder(backend)

        entry = await recorder.add_entry("addToObsidian", "https://new.example")

        stored = backend.data[HISTORY_KEY]
        assert len(stored) == HISTORY_LIMIT
        assert stored[0] == entry.to_dict()
        assert stored[-1]["url"] == f"https://{HISTORY_LIMIT - 2}.example"

    @pytest.mark.asyncio
    async def test_timestamp_is_iso_utc(self, local_backend):
        entry = await HistoryRecorder(local_backend).add_entry("share", "https://x.example")

        assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", entry.datetime)

    @pytest.mark.asyncio
    async def test_title_omitted_from_storage_when_missing(self, local_backend):
        await HistoryRecorder(local_backend).add_entry("share", "https://x.example")

        assert "title" not in local_backend.data[HISTORY_KEY][0]

    @pytest.mark.asyncio
    async def test_clear(self, local_backend):
        recorder = HistoryRecorder(local_backend)
        await recorder.add_entry("share", "https://x.example")

        await recorder.clear()

        assert await recorder.get_history() == []


class TestIncrement:
    def test_existing_counter(self):
        stats = {"share": 2}
        assert increment(stats, "share") == 3
        assert stats == {"share": 3}

    def test_unknown_action_starts_at_zero(self):
        stats: dict[str, int] = {}
        assert increment(stats, "print") == 1
