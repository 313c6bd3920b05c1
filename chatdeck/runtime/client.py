"""ChatClient: the surface the front end talks to.

Wires store, registry, controller, failover loop and dispatch engine
together and exposes the rendering contract.
"""

import logging
from collections.abc import Callable

from chatdeck.core.config import ChatConfig, Config
from chatdeck.model import Message, Outcome, Session
from chatdeck.providers import Provider, build_provider_chain
from chatdeck.runtime.controller import SessionController
from chatdeck.runtime.dispatch import DispatchEngine
from chatdeck.runtime.failover import FailoverLoop
from chatdeck.runtime.registry import Listener, SessionRegistry
from chatdeck.stores import DurableStore, JsonFileStore

logger = logging.getLogger(__name__)


class ChatClient:
    """Multi-session chat client.

    Example:
        >>> client = ChatClient.from_config(load_config("config.yaml"))
        >>> client.open()
        >>> client.update_draft(client.active_session_id, "Hello")
        >>> await client.submit(client.active_session_id)
        >>> client.messages[-1].text
    """

    def __init__(
        self,
        store: DurableStore,
        providers: list[Provider],
        chat_config: ChatConfig | None = None,
        clock: Callable[[], int] | None = None,
    ):
        """Initialize the client.

        Args:
            store: Durable store for the index and message sequences.
            providers: Ordered provider chain.
            chat_config: Title and message formatting settings.
            clock: Optional millisecond clock for session ids (tests).
        """
        self.store = store
        self.chat_config = chat_config or ChatConfig()
        self.registry = SessionRegistry()

        controller_kwargs = {"clock": clock} if clock else {}
        self.controller = SessionController(store, self.registry, self.chat_config, **controller_kwargs)
        self.failover = FailoverLoop(providers)
        self.dispatcher = DispatchEngine(self.controller, self.registry, self.failover, self.chat_config)

    @classmethod
    def from_config(cls, config: Config) -> "ChatClient":
        """Build a client backed by a JSON file store and the configured chain."""
        store = JsonFileStore(config.store.directory)
        providers = build_provider_chain(config.providers)
        return cls(store, providers, chat_config=config.chat)

    def open(self) -> None:
        """Load persisted sessions and choose the startup view."""
        self.controller.open()

    def close(self) -> None:
        self.store.close()

    # Rendering contract

    @property
    def sessions(self) -> list[Session]:
        return list(self.registry.sessions)

    @property
    def active_session_id(self) -> int | None:
        return self.registry.active_session_id

    @property
    def active_session(self) -> Session | None:
        if self.registry.active_session_id is None:
            return None
        return self.registry.find(self.registry.active_session_id)

    @property
    def messages(self) -> list[Message]:
        return list(self.registry.messages)

    @property
    def providers(self) -> list[Provider]:
        return self.failover.providers

    def is_generating(self, session_id: int | None) -> bool:
        return self.registry.is_generating(session_id)

    def draft(self, session_id: int) -> str:
        return self.registry.draft(session_id)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.registry.subscribe(listener)

    # Mutators

    def create_session(self) -> Session:
        return self.controller.create_session()

    def select_session(self, session_id: int) -> list[Message]:
        return self.controller.select_session(session_id)

    def delete_session(self, session_id: int) -> None:
        self.controller.delete_session(session_id)

    def update_draft(self, session_id: int, text: str) -> None:
        self.controller.update_draft(session_id, text)

    async def submit(self, session_id: int) -> Outcome | None:
        return await self.dispatcher.submit(session_id)
