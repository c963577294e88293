from .entity_store import EntityStore
from .notification_bridge import NotificationBridge
from .request_lifecycle import Operation, OperationResult, RequestLifecycleController
from .resources import (
    ConversationService,
    CustomerService,
    EmployeeService,
    InventoryService,
    RepairService,
    ReportService,
    ResourceEndpoints,
    ResourceService,
    SaleService,
    SettingsService,
    StoreService,
)
from .store_registry import AppContext, StoreRegistry

__all__ = [
    "AppContext",
    "ConversationService",
    "CustomerService",
    "EmployeeService",
    "EntityStore",
    "InventoryService",
    "NotificationBridge",
    "Operation",
    "OperationResult",
    "RepairService",
    "ReportService",
    "RequestLifecycleController",
    "ResourceEndpoints",
    "ResourceService",
    "SaleService",
    "SettingsService",
    "StoreRegistry",
    "StoreService",
]
