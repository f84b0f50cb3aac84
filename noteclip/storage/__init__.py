"""Durable key-value backends."""

from noteclip.storage.base import KeyValueBackend
from noteclip.storage.json_file import JsonFileBackend
from noteclip.storage.memory import MemoryBackend

__all__ = ["KeyValueBackend", "JsonFileBackend", "MemoryBackend"]
