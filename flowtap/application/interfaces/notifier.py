"""Abstract interface (port) for surfacing one-shot notifications to the user."""

from abc import ABC, abstractmethod

from flowtap.domain.entities import Notification


class Notifier(ABC):
    """Port for notification sinks — toasts, SSE streams, logs."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Deliver a notification. Must not block the event loop."""
        ...
