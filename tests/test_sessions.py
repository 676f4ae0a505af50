import itertools

import pytest

from ghe_lib.bridge.sessions import SessionRegistry, SessionState


def test_open_issues_unique_ids_and_connects() -> None:
    registry = SessionRegistry()

    sessions = [registry.open(lambda sid: f"channel-{sid}") for _ in range(50)]

    ids = {session.session_id for session in sessions}
    assert len(ids) == 50
    assert all(session.connected for session in sessions)
    assert sessions[0].channel == f"channel-{sessions[0].session_id}"
    assert registry.live_count() == 50


def test_colliding_ids_are_redrawn() -> None:
    draws = iter(["a", "a", "b", "a", "c"])
    registry = SessionRegistry(id_factory=lambda: next(draws))

    first = registry.open(lambda sid: None)
    second = registry.open(lambda sid: None)
    registry.remove(first.session_id)
    third = registry.open(lambda sid: None)

    assert [first.session_id, second.session_id, third.session_id] == ["a", "b", "c"]


def test_failed_channel_factory_registers_nothing() -> None:
    counter = itertools.count()
    registry = SessionRegistry(id_factory=lambda: f"s{next(counter)}")

    def broken(session_id: str):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        registry.open(broken)

    assert len(registry) == 0
    assert registry.open(lambda sid: None).session_id == "s1"


def test_mark_closed_keeps_entry_until_removed() -> None:
    registry = SessionRegistry()
    session = registry.open(lambda sid: None)

    registry.mark_closed(session.session_id)

    assert session.session_id in registry
    assert registry.get(session.session_id).state is SessionState.CLOSED
    assert registry.live_count() == 0

    removed = registry.remove(session.session_id)
    assert removed is session
    assert registry.get(session.session_id) is None
    assert registry.remove(session.session_id) is None


def test_closing_one_session_leaves_others_routable() -> None:
    registry = SessionRegistry()
    a = registry.open(lambda sid: None)
    b = registry.open(lambda sid: None)

    registry.remove(a.session_id)

    assert registry.get(b.session_id) is b
    assert b.connected
