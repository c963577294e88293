"""Unit tests for the EntityStore commit machinery and explicit actions."""

import pytest

from flowtap.application.services import EntityStore
from flowtap.domain.entities import Pagination, RequestPhase


@pytest.fixture
def store() -> EntityStore:
    return EntityStore("customers", default_pagination=Pagination(page=1, limit=25))


def test_initial_state(store: EntityStore):
    assert store.request_phase is RequestPhase.IDLE
    assert store.collection == []
    assert store.selected is None
    assert store.pagination.limit == 25
    assert store.is_loading is False


def test_transaction_commits_on_clean_exit(store: EntityStore):
    with store.transaction() as draft:
        draft.append({"id": 1})
        assert store.collection == []
    assert store.collection == [{"id": 1}]


def test_transaction_discards_draft_on_error(store: EntityStore):
    with pytest.raises(RuntimeError):
        with store.transaction() as draft:
            draft.append({"id": 1})
            raise RuntimeError("abort")
    assert store.collection == []


def test_selectors_return_copies(store: EntityStore):
    with store.transaction() as draft:
        draft.append({"id": 1})
    store.collection.append({"id": 2})
    store.pagination.page = 9
    assert len(store.collection) == 1
    assert store.pagination.page == 1


def test_listeners_see_nested_commits_in_order(store: EntityStore):
    seen: list[tuple[str | None, str | None]] = []

    def clearing_listener(s, previous, current):
        if current.message:
            s.clear_message()

    store.subscribe(clearing_listener)
    store.subscribe(lambda s, previous, current: seen.append((previous.message, current.message)))

    with store.transaction() as draft:
        draft.fulfill("Saved")

    assert seen == [(None, "Saved"), ("Saved", None)]
    assert store.message is None


def test_failing_listener_does_not_block_others(store: EntityStore):
    calls = []

    def broken(s, previous, current):
        raise ValueError("listener bug")

    store.subscribe(broken)
    store.subscribe(lambda s, p, c: calls.append(c))
    store.set_selected({"id": 1})
    assert len(calls) == 1


def test_unsubscribe(store: EntityStore):
    calls = []
    unsubscribe = store.subscribe(lambda s, p, c: calls.append(c))
    unsubscribe()
    unsubscribe()
    store.set_selected({"id": 1})
    assert calls == []


def test_tokens_track_latest_and_in_flight(store: EntityStore):
    first = store.dispatch_request()
    second = store.dispatch_request()
    assert second > first
    assert store.is_latest(second)
    assert not store.is_latest(first)
    assert store.in_flight == 2
    assert store.is_loading


def test_abandon_latest_request_returns_to_idle(store: EntityStore):
    token = store.dispatch_request()
    store.abandon_request(token)
    assert store.in_flight == 0
    assert store.request_phase is RequestPhase.IDLE


def test_abandon_latest_hands_latest_to_newest_outstanding(store: EntityStore):
    first = store.dispatch_request()
    second = store.dispatch_request()
    third = store.dispatch_request()
    store.release_request(second)

    store.abandon_request(third)

    assert store.is_latest(first)
    assert store.request_phase is RequestPhase.PENDING


def test_default_pagination_ignores_later_lists(store: EntityStore):
    with store.transaction() as draft:
        draft.pagination = Pagination(page=3, limit=20, total=60)

    assert store.default_pagination.to_dict() == {"page": 1, "limit": 25, "total": 0}


def test_clear_actions_are_noops_when_empty(store: EntityStore):
    calls = []
    store.subscribe(lambda s, p, c: calls.append(c))
    store.clear_error()
    store.clear_message()
    assert calls == []


def test_find_matches_by_string_id(store: EntityStore):
    with store.transaction() as draft:
        draft.replace_collection([{"id": 1}, {"id": 2}])
    assert store.find("2") == {"id": 2}
    assert store.find(5) is None


def test_children_and_documents(store: EntityStore):
    store.add_child(7, {"id": "m1"})
    store.add_child("7", {"id": "m2"})
    assert [m["id"] for m in store.children_of(7)] == ["m1", "m2"]

    with store.transaction() as draft:
        draft.put_document("dashboard", {"sales": 3})
    assert store.document("dashboard") == {"sales": 3}
    store.clear_documents()
    assert store.document("dashboard") is None


def test_reset_restores_initial_state_but_keeps_in_flight(store: EntityStore):
    store.dispatch_request()
    with store.transaction() as draft:
        draft.replace_collection([{"id": 1}], Pagination(page=4, limit=25, total=90))
        draft.select({"id": 1})
        draft.reject("failed")
    store.reset()
    assert store.collection == []
    assert store.selected is None
    assert store.error is None
    assert store.request_phase is RequestPhase.IDLE
    assert store.pagination.page == 1
    assert store.in_flight == 1
