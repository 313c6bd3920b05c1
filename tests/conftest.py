"""Shared fixtures and fakes for chatdeck tests."""

import asyncio
import itertools
from collections.abc import Callable

import pytest

from chatdeck.model import Message
from chatdeck.providers import Provider
from chatdeck.runtime import ChatClient
from chatdeck.stores import InMemoryStore


class ScriptedProvider(Provider):
    """Provider that replies, fails or blocks as scripted, recording every call."""

    def __init__(
        self,
        name: str,
        reply: str | None = None,
        error: Exception | None = None,
        kind: str = "remote",
        unavailable: str | None = None,
        gate: asyncio.Event | None = None,
        gated_texts: set[str] | None = None,
    ):
        self.name = name
        self.reply = reply
        self.error = error
        self.kind = kind
        self.unavailable = unavailable
        self.gate = gate
        self.gated_texts = gated_texts
        self.calls: list[tuple[list[Message], str]] = []

    def identify(self) -> str:
        return self.name

    async def probe(self) -> str | None:
        return self.unavailable

    async def generate(self, history: list[Message], new_text: str) -> str:
        self.calls.append((list(history), new_text))
        if self.gate is not None and (self.gated_texts is None or new_text in self.gated_texts):
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply or ""


async def wait_until(predicate: Callable[[], bool], attempts: int = 100) -> None:
    """Yield to the loop until predicate holds."""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock() -> Callable[[], int]:
    """Deterministic millisecond clock: 1000, 1001, ..."""
    counter = itertools.count(1000)
    return lambda: next(counter)


@pytest.fixture
def make_client(store, clock):
    """Build and open a ChatClient over the shared in-memory store."""

    def _make(providers: list[Provider]) -> ChatClient:
        client = ChatClient(store, providers, clock=clock)
        client.open()
        return client

    return _make
