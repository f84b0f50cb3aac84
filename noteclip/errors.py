"""Exceptions raised by noteclip."""

from __future__ import annotations


class NoteclipError(Exception):
    """Base class for noteclip errors."""


class MigrationError(NoteclipError):
    """A legacy settings migration failed before committing.

    Nothing has been written when this is raised, so the migration runs
    again on the next load.
    """
