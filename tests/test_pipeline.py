"""Tests for the clip hand-off."""

import pytest

from noteclip.clip.frontmatter import FRONTMATTER_START, Property
from noteclip.clip.pipeline import CLIP_ACTION, ClipRequest, clip


class RecordingDispatcher:
    def __init__(self, fail: bool = False) -> None:
        self.calls: list[dict] = []
        self.fail = fail

    async def dispatch(self, content, note_name, behavior, silent=False):
        if self.fail:
            raise RuntimeError("note app not reachable")
        self.calls.append({
            "content": content,
            "note_name": note_name,
            "behavior": behavior,
            "silent": silent,
        })


class TestClip:
    """Tests for clip()."""

    @pytest.mark.asyncio
    async def test_create_prepends_frontmatter(self, store):
        await store.load()
        dispatcher = RecordingDispatcher()
        request = ClipRequest(
            note_name="Example",
            content="Body text",
            properties=[Property("title", "Example")],
        )

        note = await clip(store, dispatcher, request)

        assert note.startswith(FRONTMATTER_START)
        assert 'title:: "Example"\n' in note
        assert note.endswith("Highlights:\nBody text")
        assert dispatcher.calls[0]["note_name"] == "Example"

    @pytest.mark.asyncio
    async def test_append_sends_body_only(self, store):
        await store.load()
        dispatcher = RecordingDispatcher()
        request = ClipRequest(
            note_name="Daily",
            content="Just this",
            properties=[Property("title", "ignored")],
            behavior="append-daily",
        )

        assert await clip(store, dispatcher, request) == "Just this"
        assert dispatcher.calls[0]["behavior"] == "append-daily"

    @pytest.mark.asyncio
    async def test_silent_open_passed_through(self, store):
        await store.load()
        await store.save({"silent_open": True})
        dispatcher = RecordingDispatcher()

        await clip(store, dispatcher, ClipRequest("N", "c"))

        assert dispatcher.calls[0]["silent"] is True

    @pytest.mark.asyncio
    async def test_success_counts_and_records(self, store):
        await store.load()

        await clip(store, RecordingDispatcher(), ClipRequest("N", "c"), url="https://x.example", title="X")

        assert store.settings.stats[CLIP_ACTION] == 1
        history = await store.history.get_history()
        assert history[0].action == CLIP_ACTION
        assert history[0].title == "X"

    @pytest.mark.asyncio
    async def test_dispatch_failure_propagates_uncounted(self, store):
        await store.load()

        with pytest.raises(RuntimeError):
            await clip(store, RecordingDispatcher(fail=True), ClipRequest("N", "c"), url="https://x.example")

        assert store.settings.stats[CLIP_ACTION] == 0
        assert await store.history.get_history() == []
