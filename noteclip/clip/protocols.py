"""Contracts of the collaborators the clip pipeline talks to.

Only the interfaces live here; page extraction, template matching,
variable resolution and the hand-off to the note app are provided by
the host.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence


@dataclass
class PageContent:
    """What the extractor returns for a tab."""

    content: str
    full_html: str
    selected_html: Optional[str] = None
    schema_org_data: Any = None
    extra: dict[str, Any] = field(default_factory=dict)


class PageExtractor(Protocol):
    async def extract(self, tab_id: int) -> Optional[PageContent]:
        ...


class VariableResolver(Protocol):
    """Resolves ``{{placeholders}}``; a string without any is returned as-is."""

    async def resolve(
        self,
        text: str,
        variables: dict[str, str],
        tab_id: int,
        url: str,
    ) -> str:
        ...


class TemplateMatcher(Protocol):
    def match(self, url: str, templates: Sequence[Any], schema_org_data: Any) -> Optional[Any]:
        ...


class DestinationDispatcher(Protocol):
    """Hands finished note content to the note-taking app.

    Implementations raise on failure.
    """

    async def dispatch(
        self,
        content: str,
        note_name: str,
        behavior: str,
        silent: bool = False,
    ) -> None:
        ...
