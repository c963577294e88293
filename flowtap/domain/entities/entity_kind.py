from enum import Enum


class EntityKind(str, Enum):
    """Business object categories, each backed by its own entity store."""

    CUSTOMERS = "customers"
    INVENTORY = "inventory"
    REPAIRS = "repairs"
    EMPLOYEES = "employees"
    SALES = "sales"
    CONVERSATIONS = "conversations"
    REPORTS = "reports"
    SETTINGS = "settings"
