from .broadcaster import NotificationBroadcaster
from .log_notifier import CompositeNotifier, LoggingNotifier

__all__ = [
    "NotificationBroadcaster",
    "CompositeNotifier",
    "LoggingNotifier",
]
