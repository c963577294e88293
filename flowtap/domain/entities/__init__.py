from .entity_kind import EntityKind
from .entity_state import (
    EntityRecord,
    EntityState,
    Pagination,
    RequestPhase,
    record_id,
    same_id,
)
from .notification import Notification, NotificationLevel

__all__ = [
    "EntityKind",
    "EntityRecord",
    "EntityState",
    "Pagination",
    "RequestPhase",
    "record_id",
    "same_id",
    "Notification",
    "NotificationLevel",
]
