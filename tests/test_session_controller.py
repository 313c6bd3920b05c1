"""Tests for SessionController and the session registry."""

import pytest

from chatdeck.core.config import ChatConfig
from chatdeck.model import Message, Session
from chatdeck.runtime import RegistryEvent, SessionController, SessionNotFoundError, SessionRegistry
from chatdeck.stores import INDEX_KEY, InMemoryStore, JsonFileStore, session_key


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def controller(store, registry, clock) -> SessionController:
    return SessionController(store, registry, clock=clock)


class TestOpen:
    """Startup view selection."""

    def test_empty_store_creates_session(self, controller, registry, store):
        controller.open()

        assert len(registry.sessions) == 1
        assert registry.active_session_id == registry.sessions[0].id
        assert registry.messages == []
        assert store.get(INDEX_KEY) == [{"id": 1000, "title": "New conversation"}]

    def test_existing_index_selects_last_session(self, registry, clock):
        store = InMemoryStore({
            INDEX_KEY: [{"id": 1, "title": "first"}, {"id": 2, "title": "second"}],
            session_key(2): [{"text": "hello", "is_user": True}],
        })
        controller = SessionController(store, registry, clock=clock)

        controller.open()

        assert registry.active_session_id == 2
        assert registry.messages == [Message("hello", True)]

    def test_malformed_index_entries_are_skipped(self, registry, clock):
        store = InMemoryStore({INDEX_KEY: [{"title": "no id"}, {"id": 5, "title": "ok"}]})
        controller = SessionController(store, registry, clock=clock)

        controller.open()

        assert registry.sessions == [Session(id=5, title="ok")]

    def test_undecodable_index_file_starts_fresh(self, tmp_path, registry, clock):
        store = JsonFileStore(tmp_path)
        (tmp_path / "chatSessions.json").write_bytes(b"\xff\xfe[]")
        controller = SessionController(store, registry, clock=clock)

        controller.open()

        assert len(registry.sessions) == 1
        assert registry.active_session_id == registry.sessions[0].id

    def test_malformed_messages_are_skipped(self, registry, clock):
        store = InMemoryStore({
            INDEX_KEY: [{"id": 5, "title": "ok"}],
            session_key(5): ["oops", {"text": "hello", "is_user": True}, 7],
        })
        controller = SessionController(store, registry, clock=clock)

        controller.open()

        assert registry.messages == [Message("hello", True)]

    def test_non_list_values_read_as_empty(self, registry, clock):
        store = InMemoryStore({
            INDEX_KEY: [{"id": 5, "title": "ok"}],
            session_key(5): {"text": "not a list"},
        })
        controller = SessionController(store, registry, clock=clock)

        controller.open()

        assert registry.active_session_id == 5
        assert registry.messages == []


class TestCreate:
    def test_create_persists_index_but_not_messages(self, controller, registry, store):
        controller.open()
        session = controller.create_session()

        assert registry.active_session_id == session.id
        assert session.title == "New conversation"
        assert [entry["id"] for entry in store.get(INDEX_KEY)] == [1000, session.id]
        assert store.get(session_key(session.id)) is None

    def test_ids_are_unique_when_clock_stalls(self, store, registry):
        controller = SessionController(store, registry, clock=lambda: 42)
        controller.open()

        ids = [controller.create_session().id for _ in range(3)]

        assert ids == [43, 44, 45]
        assert len({s.id for s in registry.sessions}) == 4

    def test_create_uses_configured_title(self, store, registry, clock):
        controller = SessionController(store, registry, ChatConfig(default_title="Untitled"), clock=clock)
        controller.open()

        assert registry.sessions[0].title == "Untitled"


class TestSelect:
    def test_select_unknown_session_raises(self, controller):
        controller.open()

        with pytest.raises(SessionNotFoundError):
            controller.select_session(12345)

    def test_select_never_persisted_session_is_empty(self, controller, registry):
        controller.open()
        first = registry.active_session_id
        controller.create_session()

        assert controller.select_session(first) == []
        assert registry.active_session_id == first

    def test_select_does_not_touch_processing(self, controller, registry):
        controller.open()
        sid = registry.active_session_id
        registry.begin_processing(sid)

        controller.create_session()
        controller.select_session(sid)

        assert registry.is_generating(sid)


class TestDelete:
    def test_delete_active_selects_first_remaining(self, controller, registry, store):
        controller.open()
        first = registry.active_session_id
        second = controller.create_session().id
        controller.save_messages(second, [Message("bye", True)])

        controller.delete_session(second)

        assert registry.active_session_id == first
        assert store.get(session_key(second)) is None
        assert [entry["id"] for entry in store.get(INDEX_KEY)] == [first]

    def test_delete_last_session_creates_fresh_one(self, controller, registry):
        controller.open()
        only = registry.active_session_id

        controller.delete_session(only)

        assert len(registry.sessions) == 1
        assert registry.sessions[0].id != only
        assert registry.active_session_id == registry.sessions[0].id

    def test_delete_background_session_keeps_view(self, controller, registry):
        controller.open()
        background = registry.active_session_id
        active = controller.create_session().id

        controller.delete_session(background)

        assert registry.active_session_id == active

    def test_delete_discards_draft(self, controller, registry):
        controller.open()
        sid = registry.active_session_id
        controller.create_session()
        controller.update_draft(sid, "unsent")

        controller.delete_session(sid)

        assert sid not in registry.drafts

    def test_delete_unknown_session_raises(self, controller):
        controller.open()

        with pytest.raises(SessionNotFoundError):
            controller.delete_session(999)


class TestDraftsAndTitles:
    def test_update_draft_unknown_session_raises(self, controller):
        controller.open()

        with pytest.raises(SessionNotFoundError):
            controller.update_draft(999, "text")

    def test_drafts_are_per_session(self, controller, registry):
        controller.open()
        x = registry.active_session_id
        y = controller.create_session().id

        controller.update_draft(x, "for x")
        controller.update_draft(y, "for y")

        assert registry.draft(x) == "for x"
        assert registry.draft(y) == "for y"

    def test_derive_title_truncates(self, controller):
        assert controller.derive_title("Hello world, how are you today?") == "Hello world, ho..."

    def test_derive_title_short_text_still_gets_suffix(self, controller):
        assert controller.derive_title("Hi") == "Hi..."

    def test_retitle_persists_index(self, controller, registry, store):
        controller.open()
        sid = registry.active_session_id

        controller.retitle_session(sid, "Renamed")

        assert store.get(INDEX_KEY) == [{"id": sid, "title": "Renamed"}]


class TestRegistry:
    def test_listeners_receive_events(self, controller, registry):
        events: list[tuple[RegistryEvent, int | None]] = []
        registry.subscribe(lambda event, sid: events.append((event, sid)))

        controller.open()

        kinds = [event for event, _ in events]
        assert RegistryEvent.SESSIONS in kinds
        assert RegistryEvent.ACTIVE in kinds

    def test_unsubscribe_stops_events(self, registry):
        events = []
        unsubscribe = registry.subscribe(lambda event, sid: events.append(event))
        unsubscribe()

        registry.notify(RegistryEvent.SESSIONS)

        assert events == []

    def test_failing_listener_does_not_break_others(self, registry):
        events = []

        def broken(event, sid):
            raise RuntimeError("render failed")

        registry.subscribe(broken)
        registry.subscribe(lambda event, sid: events.append(event))

        registry.notify(RegistryEvent.DRAFT, 1)

        assert events == [RegistryEvent.DRAFT]

    def test_rendered_updates_only_apply_to_active_session(self, registry):
        registry.show(1, [])

        assert registry.append_rendered(2, Message("x", True)) is False
        assert registry.replace_rendered(2, [Message("x", True)]) is False
        assert registry.messages == []

        assert registry.append_rendered(1, Message("y", True)) is True
        assert registry.messages == [Message("y", True)]
