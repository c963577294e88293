from .notifier import Notifier
from .transport import Transport

__all__ = [
    "Notifier",
    "Transport",
]
