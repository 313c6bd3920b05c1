"""In-memory session registry: the state the front end renders from.

Owns the session index mirror, the Active View Pointer, the rendered message
sequence of the active session, per-session drafts and the Processing Set.
Nothing here touches the durable store.
"""

import logging
from collections.abc import Callable
from enum import Enum

from chatdeck.model import Message, Session

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when an operation names a session id that is not in the index."""


class RegistryEvent(Enum):
    """Kinds of state change broadcast to listeners."""

    SESSIONS = "sessions"  # index changed: create, delete, retitle
    ACTIVE = "active"  # Active View Pointer moved
    MESSAGES = "messages"  # rendered sequence of the active session changed
    PROCESSING = "processing"  # a session started or stopped generating
    DRAFT = "draft"


Listener = Callable[[RegistryEvent, int | None], None]


class SessionRegistry:
    """Single source of truth for what the user sees.

    All mutation happens on one event loop, so no locking is needed: the
    Processing Set check-and-add in the dispatch path has no suspension point
    between the check and the add.
    """

    def __init__(self) -> None:
        self.sessions: list[Session] = []
        self.active_session_id: int | None = None
        self.messages: list[Message] = []
        self.drafts: dict[int, str] = {}
        self.processing: set[int] = set()
        self._listeners: list[Listener] = []

    # Listeners

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def notify(self, event: RegistryEvent, session_id: int | None = None) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, session_id)
            except Exception as e:
                # A broken renderer must not corrupt session state
                logger.error(f"Listener failed on {event.value} for session {session_id}: {e}", exc_info=True)

    # Index

    def find(self, session_id: int) -> Session | None:
        for session in self.sessions:
            if session.id == session_id:
                return session
        return None

    def has(self, session_id: int) -> bool:
        return self.find(session_id) is not None

    def require(self, session_id: int) -> Session:
        """Return the session or raise SessionNotFoundError."""
        session = self.find(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    # Drafts

    def draft(self, session_id: int) -> str:
        return self.drafts.get(session_id, "")

    def set_draft(self, session_id: int, text: str) -> None:
        self.drafts[session_id] = text
        self.notify(RegistryEvent.DRAFT, session_id)

    def discard_draft(self, session_id: int) -> None:
        self.drafts.pop(session_id, None)

    # Processing Set

    def is_generating(self, session_id: int | None) -> bool:
        return session_id in self.processing

    def begin_processing(self, session_id: int) -> None:
        self.processing.add(session_id)
        self.notify(RegistryEvent.PROCESSING, session_id)

    def end_processing(self, session_id: int) -> None:
        self.processing.discard(session_id)
        self.notify(RegistryEvent.PROCESSING, session_id)

    # Active view

    def is_active(self, session_id: int) -> bool:
        return self.active_session_id == session_id

    def show(self, session_id: int, messages: list[Message]) -> None:
        """Point the view at a session and render its messages."""
        self.active_session_id = session_id
        self.messages = list(messages)
        self.notify(RegistryEvent.ACTIVE, session_id)

    def append_rendered(self, session_id: int, message: Message) -> bool:
        """Append to the rendered sequence if session_id is being viewed."""
        if not self.is_active(session_id):
            return False
        self.messages = [*self.messages, message]
        self.notify(RegistryEvent.MESSAGES, session_id)
        return True

    def replace_rendered(self, session_id: int, messages: list[Message]) -> bool:
        """Replace the rendered sequence if session_id is being viewed."""
        if not self.is_active(session_id):
            return False
        self.messages = list(messages)
        self.notify(RegistryEvent.MESSAGES, session_id)
        return True
