from .actions import MessageCreate, RoleUpdate, StatusUpdate, StockUpdate
from .envelope import NormalizedResponse, PaginationSchema
from .store import (
    NotificationSchema,
    OperationEnvelope,
    OperationResultResponse,
    StoreStateResponse,
    StoreSummaryResponse,
)

__all__ = [
    "MessageCreate",
    "RoleUpdate",
    "StatusUpdate",
    "StockUpdate",
    "NormalizedResponse",
    "PaginationSchema",
    "NotificationSchema",
    "OperationEnvelope",
    "OperationResultResponse",
    "StoreStateResponse",
    "StoreSummaryResponse",
]
