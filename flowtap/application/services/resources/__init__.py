from .base import ResourceEndpoints, ResourceService, StoreService
from .conversation_service import ConversationService
from .customer_service import CustomerService
from .employee_service import EmployeeService
from .inventory_service import InventoryService
from .repair_service import RepairService
from .report_service import REPORT_NAMES, ReportService
from .sale_service import SaleService
from .settings_service import SETTINGS_SECTIONS, SettingsService

__all__ = [
    "ConversationService",
    "CustomerService",
    "EmployeeService",
    "InventoryService",
    "REPORT_NAMES",
    "RepairService",
    "ReportService",
    "ResourceEndpoints",
    "ResourceService",
    "SETTINGS_SECTIONS",
    "SaleService",
    "SettingsService",
    "StoreService",
]
