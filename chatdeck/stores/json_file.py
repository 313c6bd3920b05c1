"""JSON file store: one file per key inside a directory.

Keys map to ``{directory}/{key}.json``. Writes are atomic (temp file +
rename), so a crash mid-write never leaves a truncated value behind.
"""

import json
import logging
import re
from pathlib import Path
from threading import Lock
from typing import Any

from chatdeck.stores.base import DurableStore

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileStore(DurableStore):
    """Durable store persisting each key as a JSON document.

    Example:
        >>> store = JsonFileStore(Path("~/.chatdeck/store").expanduser())
        >>> store.open()
        >>> store.set("chatSessions", [{"id": 1, "title": "New conversation"}])
        >>> store.get("chatSessions")
        [{'id': 1, 'title': 'New conversation'}]
    """

    SUFFIX = ".json"

    def __init__(self, directory: Path | str):
        """Initialize the store.

        Args:
            directory: Directory holding one JSON file per key.
        """
        self.directory = Path(directory)
        self._lock = Lock()

    def open(self) -> None:
        """Create the storage directory if needed."""
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"JsonFileStore opened: {self.directory}")

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.directory / f"{key}{self.SUFFIX}"

    def get(self, key: str) -> Any | None:
        """Read a key. Missing or corrupted files read as absent."""
        path = self._path_for(key)
        with self._lock:
            if not path.exists():
                return None

            try:
                with path.open("r", encoding="utf-8") as f:
                    return json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.error(f"Corrupted store file {path}: {e}")
                return None

    def set(self, key: str, value: Any) -> None:
        """Overwrite a key atomically.

        Raises:
            OSError: If the file cannot be written. Store failures are fatal
                to the calling operation.
        """
        path = self._path_for(key)
        with self._lock:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".tmp")
            try:
                with tmp_path.open("w", encoding="utf-8") as f:
                    json.dump(value, f, ensure_ascii=False, indent=2)

                # POSIX rename is atomic
                tmp_path.replace(path)
            except OSError as e:
                logger.error(f"Failed to write {path}: {e}", exc_info=True)
                raise

            logger.debug(f"Saved key {key}")

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        with self._lock:
            path.unlink(missing_ok=True)
            logger.debug(f"Deleted key {key}")

    def keys(self) -> list[str]:
        """List stored keys, sorted by name."""
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob(f"*{self.SUFFIX}"))
