"""Session controller: create, select and delete sessions.

Keeps the durable store consistent with the in-memory registry. Every
mutation of the index is written through immediately.
"""

import logging
import time
from collections.abc import Callable

from chatdeck.core.config import ChatConfig
from chatdeck.model import Message, Session
from chatdeck.runtime.registry import RegistryEvent, SessionRegistry
from chatdeck.stores import INDEX_KEY, DurableStore, session_key

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class SessionController:
    """Orchestrates the session lifecycle.

    Example:
        >>> controller = SessionController(InMemoryStore(), SessionRegistry())
        >>> controller.open()
        >>> session = controller.create_session()
        >>> controller.select_session(session.id)
    """

    def __init__(
        self,
        store: DurableStore,
        registry: SessionRegistry,
        chat_config: ChatConfig | None = None,
        clock: Callable[[], int] = _now_ms,
    ):
        """Initialize the controller.

        Args:
            store: Durable store holding the index and message sequences.
            registry: In-memory state shared with the dispatch engine.
            chat_config: Title and message formatting settings.
            clock: Millisecond clock used to mint session ids.
        """
        self.store = store
        self.registry = registry
        self.chat_config = chat_config or ChatConfig()
        self._clock = clock

    # Persistence helpers

    def _read_list(self, key: str) -> list:
        raw = self.store.get(key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.error(f"Ignoring malformed value for {key}: expected a list, got {type(raw).__name__}")
            return []
        return raw

    def load_index(self) -> list[Session]:
        sessions = []
        for entry in self._read_list(INDEX_KEY):
            try:
                sessions.append(Session.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Skipping malformed session index entry {entry!r}: {e}")
        return sessions

    def save_index(self) -> None:
        self.store.set(INDEX_KEY, [s.to_dict() for s in self.registry.sessions])

    def load_messages(self, session_id: int) -> list[Message]:
        """Read the persisted message sequence (empty if never persisted)."""
        messages = []
        for entry in self._read_list(session_key(session_id)):
            if not isinstance(entry, dict):
                logger.error(f"Skipping malformed message in session {session_id}: {entry!r}")
                continue
            messages.append(Message.from_dict(entry))
        return messages

    def save_messages(self, session_id: int, messages: list[Message]) -> None:
        """Overwrite the persisted message sequence."""
        self.store.set(session_key(session_id), [m.to_dict() for m in messages])

    # Lifecycle

    def open(self) -> None:
        """Open the store, load the index and pick the startup view.

        The most recently created session is shown; with no sessions a new
        one is created.
        """
        self.store.open()
        self.registry.sessions = self.load_index()
        self.registry.notify(RegistryEvent.SESSIONS)
        logger.info(f"Loaded {len(self.registry.sessions)} session(s)")

        if self.registry.sessions:
            self.select_session(self.registry.sessions[-1].id)
        else:
            self.create_session()

    def _next_id(self) -> int:
        candidate = self._clock()
        if self.registry.sessions:
            # Ids stay unique and monotonic even when the clock does not advance
            candidate = max(candidate, max(s.id for s in self.registry.sessions) + 1)
        return candidate

    def create_session(self) -> Session:
        """Create an empty session and make it the active view.

        The message sequence is not persisted until the first message.
        """
        session = Session(id=self._next_id(), title=self.chat_config.default_title)
        self.registry.sessions = [*self.registry.sessions, session]
        self.save_index()
        self.registry.notify(RegistryEvent.SESSIONS, session.id)

        self.registry.show(session.id, [])
        logger.info(f"Created session {session.id}")
        return session

    def select_session(self, session_id: int) -> list[Message]:
        """Show a session's persisted messages.

        Does not touch the Processing Set: a session that is still generating
        stays generating after being reselected.

        Raises:
            SessionNotFoundError: If session_id is not in the index.
        """
        self.registry.require(session_id)
        messages = self.load_messages(session_id)
        self.registry.show(session_id, messages)
        logger.debug(f"Selected session {session_id} ({len(messages)} messages)")
        return messages

    def delete_session(self, session_id: int) -> None:
        """Remove a session, its persisted messages and its draft.

        Callers are responsible for confirming with the user first. In-flight
        dispatches for the session are not cancelled.

        Raises:
            SessionNotFoundError: If session_id is not in the index.
        """
        self.registry.require(session_id)

        self.registry.sessions = [s for s in self.registry.sessions if s.id != session_id]
        self.save_index()
        self.store.delete(session_key(session_id))
        self.registry.discard_draft(session_id)
        self.registry.notify(RegistryEvent.SESSIONS, session_id)
        logger.info(f"Deleted session {session_id}")

        if self.registry.is_active(session_id):
            if self.registry.sessions:
                self.select_session(self.registry.sessions[0].id)
            else:
                self.create_session()

    def update_draft(self, session_id: int, text: str) -> None:
        """Replace the unsent input for a session.

        Raises:
            SessionNotFoundError: If session_id is not in the index.
        """
        self.registry.require(session_id)
        self.registry.set_draft(session_id, text)

    # Titles

    def derive_title(self, text: str) -> str:
        """Fixed-length prefix of the first message plus a fixed suffix."""
        return text[: self.chat_config.title_prefix_length] + self.chat_config.title_suffix

    def retitle_session(self, session_id: int, title: str) -> None:
        """Rewrite a session's title and persist the index."""
        session = self.registry.find(session_id)
        if session is None:
            logger.warning(f"Cannot retitle unknown session {session_id}")
            return
        session.title = title
        self.save_index()
        self.registry.notify(RegistryEvent.SESSIONS, session_id)
