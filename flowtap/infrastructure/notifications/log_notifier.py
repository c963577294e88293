"""Logging and fan-out notifiers."""

import logging

from flowtap.application.interfaces import Notifier
from flowtap.domain.entities import Notification

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Writes notifications to the log — successes at INFO, failures at WARNING."""

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.is_failure else logging.INFO
        logger.log(
            level,
            "[%s] %s: %s",
            notification.store,
            notification.title,
            notification.description,
        )


class CompositeNotifier(Notifier):
    """Delivers each notification to every wrapped notifier."""

    def __init__(self, *notifiers: Notifier) -> None:
        self._notifiers = list(notifiers)

    def notify(self, notification: Notification) -> None:
        for notifier in self._notifiers:
            try:
                notifier.notify(notification)
            except Exception:
                logger.exception("%s failed to deliver a notification", type(notifier).__name__)
