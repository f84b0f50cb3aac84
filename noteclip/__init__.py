"""noteclip: settings and note-building core of a web clipper."""

__version__ = "0.4.0"
