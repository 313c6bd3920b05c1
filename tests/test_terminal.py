"""Tests for the terminal front end."""

import asyncio
import io

import pytest
from conftest import ScriptedProvider, wait_until

from chatdeck.runtime import ChatClient
from chatdeck.stores import session_key
from chatdeck.terminal import GENERATING_NOTICE, ChatApp, TerminalChannel


def scripted_input(lines: list[str]):
    """input() replacement returning lines in order, then end of input."""
    remaining = list(lines)

    def _input(prompt: str) -> str:
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return _input


def build_app(store, clock, providers, lines):
    client = ChatClient(store, providers, clock=clock)
    output = io.StringIO()
    terminal = TerminalChannel(client, output=output, input_func=scripted_input(lines))
    return ChatApp(client, terminal), output


@pytest.mark.asyncio
async def test_chat_round_trip(store, clock):
    app, output = build_app(store, clock, [ScriptedProvider("A", reply="hi!")], ["hello", "/quit"])

    await app.run()

    sid = app.client.active_session_id
    assert store.get(session_key(sid)) == [
        {"text": "hello", "is_user": True},
        {"text": "hi!\n\nRunning on: A", "is_user": False},
    ]
    text = output.getvalue()
    assert "What can I help you with?" in text
    assert "ai: hi!" in text


@pytest.mark.asyncio
async def test_end_of_input_exits(store, clock):
    app, output = build_app(store, clock, [ScriptedProvider("A", reply="x")], [])

    await app.run()

    assert "Type /help for commands." in output.getvalue()


@pytest.mark.asyncio
async def test_command_output_is_written(store, clock):
    app, output = build_app(store, clock, [ScriptedProvider("A", reply="x")], ["/list", "/nope"])

    await app.run()

    text = output.getvalue()
    assert "> 1. 💬 New conversation" in text
    assert "Unknown command /nope" in text


@pytest.mark.asyncio
async def test_send_rejected_while_generating(store, clock):
    gate = asyncio.Event()
    provider = ScriptedProvider("A", reply="done", gate=gate)
    app, output = build_app(store, clock, [provider], [])
    app.client.open()
    sid = app.client.active_session_id

    first = app.send("first")
    await wait_until(lambda: app.client.is_generating(sid))
    assert app.send("second") is None

    assert app.client.draft(sid) == "second"

    gate.set()
    await first
    assert len(provider.calls) == 1
    assert "Still answering" in output.getvalue()

    retry = app.retry_draft()
    await retry
    assert [new_text for _, new_text in provider.calls] == ["first", "second"]
    assert app.client.draft(sid) == ""


@pytest.mark.asyncio
async def test_background_reply_notice(store, clock):
    gate = asyncio.Event()
    app, output = build_app(store, clock, [ScriptedProvider("A", reply="done", gate=gate)], [])
    app.client.subscribe(app.terminal.on_registry_event)
    app.client.open()
    x = app.client.active_session_id

    task = app.send("background question")
    await wait_until(lambda: app.client.is_generating(x))
    assert GENERATING_NOTICE in output.getvalue()

    app.client.create_session()
    gate.set()
    await task

    text = output.getvalue()
    assert 'reply ready in "background ques..."' in text
    assert "ai: done" not in text


@pytest.mark.asyncio
async def test_shutdown_waits_for_pending_replies(store, clock):
    gate = asyncio.Event()
    app, output = build_app(store, clock, [ScriptedProvider("A", reply="saved", gate=gate)], [])
    app.client.open()
    sid = app.client.active_session_id
    app.send("question")
    await wait_until(lambda: app.client.is_generating(sid))

    asyncio.get_running_loop().call_soon(gate.set)
    await app.shutdown()

    assert store.get(session_key(sid))[-1]["text"] == "saved\n\nRunning on: A"
