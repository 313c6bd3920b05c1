"""Persistence layer for chatdeck.

- DurableStore: the key -> value contract the session core depends on
- InMemoryStore: dictionary-backed, for tests and throwaway runs
- JsonFileStore: one JSON document per key on disk
"""

from chatdeck.stores.base import INDEX_KEY, DurableStore, session_key
from chatdeck.stores.json_file import JsonFileStore
from chatdeck.stores.memory import InMemoryStore

__all__ = [
    "INDEX_KEY",
    "DurableStore",
    "InMemoryStore",
    "JsonFileStore",
    "session_key",
]
