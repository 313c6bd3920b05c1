"""In-memory store, used for tests and ephemeral runs."""

import copy
from typing import Any

from chatdeck.stores.base import DurableStore


class InMemoryStore(DurableStore):
    """Dictionary-backed store.

    Values are deep-copied on the way in and out so callers can never mutate
    what is "persisted" by holding a reference.
    """

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Any | None:
        if key not in self._data:
            return None
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        """List stored keys in insertion order."""
        return list(self._data)
