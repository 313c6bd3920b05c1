"""Tests for the ordered provider failover loop."""

import pytest
from conftest import ScriptedProvider

from chatdeck.model import Exhausted, Message, ProviderFailure, ProviderSuccess
from chatdeck.runtime.failover import NO_PROVIDERS_CAUSE, FailoverLoop


@pytest.mark.asyncio
async def test_first_provider_answers():
    a = ScriptedProvider("A", reply="from a")
    b = ScriptedProvider("B", reply="from b")

    outcome = await FailoverLoop([a, b]).run([], "hi")

    assert outcome == ProviderSuccess(text="from a", provider_id="A")
    assert b.calls == []


@pytest.mark.asyncio
async def test_failures_are_skipped_in_order():
    a = ScriptedProvider("A", error=TimeoutError())
    b = ScriptedProvider("B", reply="   ")
    c = ScriptedProvider("C", reply="answer")

    outcome = await FailoverLoop([a, b, c]).run([], "hi")

    assert outcome == ProviderSuccess(text="answer", provider_id="C")
    assert [len(p.calls) for p in (a, b, c)] == [1, 1, 1]


@pytest.mark.asyncio
async def test_exhaustion_reports_last_cause_and_all_failures():
    providers = [
        ScriptedProvider("A", error=RuntimeError("rate limited")),
        ScriptedProvider("B", error=ValueError("bad request")),
    ]

    outcome = await FailoverLoop(providers).run([], "hi")

    assert isinstance(outcome, Exhausted)
    assert outcome.last_cause == "bad request"
    assert outcome.failures == [
        ProviderFailure(provider_id="A", cause="rate limited"),
        ProviderFailure(provider_id="B", cause="bad request"),
    ]


@pytest.mark.asyncio
async def test_empty_chain_is_exhausted():
    outcome = await FailoverLoop([]).run([], "hi")

    assert outcome == Exhausted(last_cause=NO_PROVIDERS_CAUSE, failures=[])


@pytest.mark.asyncio
async def test_unavailable_provider_is_not_called():
    local = ScriptedProvider("local", kind="local", reply="never", unavailable="no model installed")

    result = await FailoverLoop([local]).attempt(local, [], "hi")

    assert result == ProviderFailure(provider_id="local", cause="no model installed")
    assert local.calls == []


@pytest.mark.asyncio
async def test_exception_without_message_uses_class_name():
    provider = ScriptedProvider("A", error=ConnectionError())

    result = await FailoverLoop([provider]).attempt(provider, [], "hi")

    assert result == ProviderFailure(provider_id="A", cause="ConnectionError")


@pytest.mark.asyncio
async def test_empty_reply_is_a_failure():
    provider = ScriptedProvider("A", reply="")

    result = await FailoverLoop([provider]).attempt(provider, [], "hi")

    assert isinstance(result, ProviderFailure)
    assert "empty response" in result.cause


@pytest.mark.asyncio
async def test_trailing_user_turn_is_not_sent_twice():
    provider = ScriptedProvider("A", reply="ok")
    history = [Message("earlier", True), Message("reply", False), Message("now", True)]

    await FailoverLoop([provider]).run(history, "now")

    sent_history, new_text = provider.calls[0]
    assert new_text == "now"
    assert sent_history == history[:2]


@pytest.mark.asyncio
async def test_history_without_trailing_turn_is_passed_through():
    provider = ScriptedProvider("A", reply="ok")
    history = [Message("earlier", True), Message("reply", False)]

    await FailoverLoop([provider]).run(history, "now")

    assert provider.calls[0] == (history, "now")


class NamelessProvider(ScriptedProvider):
    """Provider whose identifier lookup fails."""

    def identify(self) -> str:
        raise RuntimeError("label lookup failed")


@pytest.mark.asyncio
async def test_failing_identify_does_not_abort_chain():
    broken = NamelessProvider("unused", reply="never")
    fallback = ScriptedProvider("B", reply="ok")

    outcome = await FailoverLoop([broken, fallback]).run([], "hello")

    assert outcome == ProviderSuccess(text="ok", provider_id="B")
    assert len(fallback.calls) == 1
    assert broken.calls == []


@pytest.mark.asyncio
async def test_failing_identify_falls_back_to_class_name():
    broken = NamelessProvider("unused", reply="never")

    outcome = await FailoverLoop([broken]).run([], "hello")

    assert outcome == Exhausted(
        last_cause="label lookup failed",
        failures=[ProviderFailure(provider_id="NamelessProvider", cause="label lookup failed")],
    )
