"""Durable key-value store contract."""

from abc import ABC, abstractmethod
from typing import Any

INDEX_KEY = "chatSessions"
SESSION_KEY_PREFIX = "session_"


def session_key(session_id: int) -> str:
    """Return the store key holding a session's message sequence."""
    return f"{SESSION_KEY_PREFIX}{session_id}"


class DurableStore(ABC):
    """Synchronous key -> value persistence with total-overwrite semantics.

    Values are JSON-compatible structures (lists and dicts of primitives).
    Reads of absent keys return None; callers decide the default.

    Lifecycle: ``open()`` once at startup before any read, ``close()`` on
    shutdown. Both are no-ops unless a backend needs them.
    """

    def open(self) -> None:
        """Prepare the backend for reads and writes."""

    def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Read the value stored under key, or None if absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Overwrite the value stored under key."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Deleting an absent key is not an error."""
        ...
