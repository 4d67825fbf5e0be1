"""Simple key-value store abstractions."""

from dataclasses import dataclass
from typing import Protocol


class KeyValueStore(Protocol):
    """Persistence interface for string values keyed by string."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory store for tests and local runs."""

    _entries: dict[str, str]

    def __init__(self) -> None:
        self._entries = {}

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""
        return self._entries.get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value."""
        self._entries[key] = value
