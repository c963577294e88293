"""Notification bridge — turns store message/error transitions into one-shot notifications.

The bridge watches committed snapshots. When ``message`` or ``error`` moves
to a new present value it emits exactly one notification and, with
``auto_clear`` on, immediately clears the field it reported. The field thus
behaves as a one-shot mailbox: a later identical failure is a fresh
transition and notifies again.
"""

import logging
from collections.abc import Callable

from flowtap.application.interfaces import Notifier
from flowtap.application.services.entity_store import EntityStore
from flowtap.domain.entities import EntityState, Notification, NotificationLevel

logger = logging.getLogger(__name__)


class NotificationBridge:
    """Observes entity stores and forwards message/error transitions to a Notifier."""

    def __init__(
        self,
        notifier: Notifier,
        *,
        success_title: str = "Success",
        error_title: str = "Error",
        show_success: bool = True,
        show_error: bool = True,
        auto_clear: bool = True,
    ) -> None:
        self._notifier = notifier
        self._success_title = success_title
        self._error_title = error_title
        self._show_success = show_success
        self._show_error = show_error
        self._auto_clear = auto_clear
        self._detachers: dict[str, Callable[[], None]] = {}

    def attach(self, store: EntityStore) -> Callable[[], None]:
        """Start observing ``store``. Attaching twice is a no-op."""
        if store.kind in self._detachers:
            return self._detachers[store.kind]

        unsubscribe = store.subscribe(self._on_change)

        def detach() -> None:
            unsubscribe()
            self._detachers.pop(store.kind, None)

        self._detachers[store.kind] = detach
        return detach

    def detach_all(self) -> None:
        for detach in list(self._detachers.values()):
            detach()

    @property
    def attached(self) -> list[str]:
        return list(self._detachers)

    def _on_change(self, store: EntityStore, previous: EntityState, current: EntityState) -> None:
        if self._show_success and current.message and current.message != previous.message:
            self._emit(store, NotificationLevel.SUCCESS, self._success_title, current.message)
            if self._auto_clear:
                store.clear_message()

        if self._show_error and current.error and current.error != previous.error:
            self._emit(store, NotificationLevel.FAILURE, self._error_title, current.error)
            if self._auto_clear:
                store.clear_error()

    def _emit(self, store: EntityStore, level: NotificationLevel, title: str, text: str) -> None:
        notification = Notification(store=store.kind, level=level, title=title, description=text)
        logger.debug("Notify [%s] %s: %s", store.kind, level.value, text)
        try:
            self._notifier.notify(notification)
        except Exception:
            logger.exception("Notifier failed for store '%s'", store.kind)
