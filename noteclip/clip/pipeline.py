"""Final step of a clip: build the note and hand it off."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from noteclip.clip.frontmatter import Property, generate_frontmatter
from noteclip.clip.protocols import DestinationDispatcher
from noteclip.config.store import SettingsStore

logger = logging.getLogger("noteclip.clip")

CLIP_ACTION = "addToObsidian"


@dataclass
class ClipRequest:
    """A note ready to be saved.

    ``behavior`` is the template's save behavior: ``create`` writes a new
    note with frontmatter, anything else (``append-daily``,
    ``append-specific``...) sends the body alone.
    """

    note_name: str
    content: str
    properties: list[Property] = field(default_factory=list)
    behavior: str = "create"


def build_note(request: ClipRequest, store: SettingsStore) -> str:
    if request.behavior == "create":
        return generate_frontmatter(request.properties, store.settings) + request.content
    return request.content


async def clip(
    store: SettingsStore,
    dispatcher: DestinationDispatcher,
    request: ClipRequest,
    url: Optional[str] = None,
    title: Optional[str] = None,
) -> str:
    """Save *request* through *dispatcher* and count it.

    Returns the note content that was sent.  Dispatcher errors are
    logged and re-raised; nothing is counted in that case.
    """
    note = build_note(request, store)
    try:
        await dispatcher.dispatch(
            note,
            request.note_name,
            request.behavior,
            silent=store.settings.silent_open,
        )
    except Exception:
        logger.exception("failed to save note %r", request.note_name)
        raise

    await store.increment_stat(CLIP_ACTION, url, title)
    return note
