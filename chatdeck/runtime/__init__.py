"""Session and concurrency core for chatdeck.

This package provides the session registry, the session controller, the
failover loop and the dispatch engine, plus the ChatClient facade that wires
them together.
"""

from chatdeck.runtime.client import ChatClient
from chatdeck.runtime.controller import SessionController
from chatdeck.runtime.dispatch import DispatchEngine
from chatdeck.runtime.failover import FailoverLoop
from chatdeck.runtime.registry import (
    Listener,
    RegistryEvent,
    SessionNotFoundError,
    SessionRegistry,
)

__all__ = [
    "ChatClient",
    "DispatchEngine",
    "FailoverLoop",
    "Listener",
    "RegistryEvent",
    "SessionController",
    "SessionNotFoundError",
    "SessionRegistry",
]
