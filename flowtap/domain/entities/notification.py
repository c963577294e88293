"""Domain entity — a one-shot user notification raised from store state."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Notification:
    """A message surfaced exactly once for a message/error transition."""

    store: str
    level: NotificationLevel
    title: str
    description: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_failure(self) -> bool:
        return self.level is NotificationLevel.FAILURE
