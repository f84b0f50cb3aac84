"""Note building: frontmatter, history and the clip hand-off."""

from noteclip.clip.frontmatter import Property, generate_frontmatter, serialize
from noteclip.clip.history import HistoryRecorder

__all__ = ["Property", "generate_frontmatter", "serialize", "HistoryRecorder"]
