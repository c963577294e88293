"""Entity store — owns the EntityState of one entity kind.

All mutations go through ``transaction()``: the block works on a draft copy
and the draft is swapped in only when the block exits cleanly, so readers
never observe a half-applied completion. Listeners receive
``(previous, current)`` snapshots in commit order, even when a listener
commits from inside its own callback.
"""

import itertools
import logging
from collections import deque
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from flowtap.domain.entities import (
    EntityRecord,
    EntityState,
    Pagination,
    RequestPhase,
    record_id,
    same_id,
)

logger = logging.getLogger(__name__)

StoreListener = Callable[["EntityStore", EntityState, EntityState], None]


class EntityStore:
    """Process-lifetime state holder for one entity kind."""

    def __init__(
        self,
        kind: str,
        *,
        id_field: str = "id",
        default_pagination: Pagination | None = None,
    ) -> None:
        self._kind = kind
        self._initial_pagination = default_pagination or Pagination()
        self._state = self._initial_state(id_field)
        self._listeners: list[StoreListener] = []
        self._events: deque[tuple[EntityState, EntityState]] = deque()
        self._dispatching = False
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self._live_tokens: set[int] = set()

    def _initial_state(self, id_field: str) -> EntityState:
        return EntityState(
            pagination=Pagination(**self._initial_pagination.to_dict()),
            id_field=id_field,
        )

    # ── Selectors ───────────────────────────────────────────────────

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def state(self) -> EntityState:
        """Current committed snapshot. Treat as read-only."""
        return self._state

    @property
    def collection(self) -> list[EntityRecord]:
        return list(self._state.collection)

    @property
    def selected(self) -> EntityRecord | None:
        return self._state.selected

    @property
    def request_phase(self) -> RequestPhase:
        return self._state.request_phase

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def message(self) -> str | None:
        return self._state.message

    @property
    def pagination(self) -> Pagination:
        return Pagination(**self._state.pagination.to_dict())

    @property
    def in_flight(self) -> int:
        return self._state.in_flight

    @property
    def default_pagination(self) -> Pagination:
        """Page window the store started with, independent of later lists."""
        return Pagination(**self._initial_pagination.to_dict())

    def document(self, name: str) -> Any:
        return self._state.documents.get(name)

    def children_of(self, parent_id: Any) -> list[EntityRecord]:
        return list(self._state.children.get(str(parent_id), []))

    def find(self, entity_id: Any) -> EntityRecord | None:
        """First cached record carrying ``entity_id``."""
        for record in self._state.collection:
            if same_id(record_id(record, self._state.id_field), entity_id):
                return record
        return None

    # ── Subscription ────────────────────────────────────────────────

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener; returns the matching unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── Commit machinery ────────────────────────────────────────────

    @contextmanager
    def transaction(self) -> Iterator[EntityState]:
        """Yield a draft; commit it atomically if the block does not raise."""
        previous = self._state
        draft = previous.copy()
        yield draft
        self._state = draft
        self._events.append((previous, draft))
        self._dispatch()

    def _dispatch(self) -> None:
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._events:
                previous, current = self._events.popleft()
                for listener in list(self._listeners):
                    try:
                        listener(self, previous, current)
                    except Exception:
                        logger.exception("Listener failed on store '%s'", self._kind)
        finally:
            self._dispatching = False

    # ── Correlation tokens ──────────────────────────────────────────

    def dispatch_request(self) -> int:
        """Mark a new request as the latest outstanding one and go Pending."""
        token = next(self._tokens)
        self._latest_token = token
        self._live_tokens.add(token)
        with self.transaction() as draft:
            draft.in_flight += 1
            draft.begin_request()
        return token

    def is_latest(self, token: int) -> bool:
        return token == self._latest_token

    def release_request(self, token: int) -> None:
        """Mark a request as completed; it no longer counts as outstanding."""
        self._live_tokens.discard(token)

    def abandon_request(self, token: int) -> None:
        """Forget a request that will never complete (e.g. task cancelled).

        When the abandoned request was the latest, the newest request still
        outstanding takes over, so its completion writes the flags. With
        nothing outstanding the store goes back to Idle.
        """
        was_latest = self.is_latest(token)
        self._live_tokens.discard(token)
        if was_latest:
            self._latest_token = max(self._live_tokens, default=0)
        with self.transaction() as draft:
            draft.in_flight = max(0, draft.in_flight - 1)
            if (
                was_latest
                and not self._live_tokens
                and draft.request_phase is RequestPhase.PENDING
            ):
                draft.request_phase = RequestPhase.IDLE

    # ── Explicit actions ────────────────────────────────────────────

    def clear_error(self) -> None:
        if self._state.error is None:
            return
        with self.transaction() as draft:
            draft.error = None

    def clear_message(self) -> None:
        if self._state.message is None:
            return
        with self.transaction() as draft:
            draft.message = None

    def set_selected(self, record: EntityRecord | None) -> None:
        with self.transaction() as draft:
            draft.select(record)

    def clear_documents(self) -> None:
        with self.transaction() as draft:
            draft.clear_documents()

    def add_child(self, parent_id: Any, record: EntityRecord) -> None:
        with self.transaction() as draft:
            draft.add_child(parent_id, record)

    def reset(self) -> None:
        """Return to the start-of-process state. Listeners are kept."""
        with self.transaction() as draft:
            draft.replace_collection([], Pagination(**self._initial_pagination.to_dict()))
            draft.select(None)
            draft.clear_documents()
            draft.children = {}
            draft.request_phase = RequestPhase.IDLE
            draft.error = None
            draft.message = None
