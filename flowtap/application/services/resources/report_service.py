"""Report service. Each report is kept as a named document on the reports store."""

from collections.abc import Mapping
from typing import Any

from flowtap.application.services.mutation_rules import document_rule
from flowtap.application.services.request_lifecycle import OperationResult
from flowtap.application.services.resources.base import StoreService
from flowtap.domain.exceptions import EntityNotFoundError

REPORTS_PATH = "/reports"
REPORT_NAMES = ("sales", "inventory", "repairs", "customers", "dashboard")


def _date_range(start_date: str | None, end_date: str | None) -> dict[str, Any]:
    return {"startDate": start_date, "endDate": end_date}


class ReportService(StoreService):
    async def _fetch(
        self, name: str, title: str, params: Mapping[str, Any] | None = None
    ) -> OperationResult:
        return await self._run(
            f"fetch{title}Report",
            lambda: self._transport.get(f"{REPORTS_PATH}/{name}", params),
            document_rule(name),
            f"{title} report fetched successfully",
            read_only=True,
        )

    async def fetch_sales_report(
        self, start_date: str | None = None, end_date: str | None = None
    ) -> OperationResult:
        return await self._fetch("sales", "Sales", _date_range(start_date, end_date))

    async def fetch_inventory_report(self) -> OperationResult:
        return await self._fetch("inventory", "Inventory")

    async def fetch_repairs_report(
        self, start_date: str | None = None, end_date: str | None = None
    ) -> OperationResult:
        return await self._fetch("repairs", "Repairs", _date_range(start_date, end_date))

    async def fetch_customer_report(self) -> OperationResult:
        return await self._fetch("customers", "Customers")

    async def fetch_dashboard_stats(self) -> OperationResult:
        return await self._run(
            "fetchDashboardStats",
            lambda: self._transport.get(f"{REPORTS_PATH}/dashboard"),
            document_rule("dashboard"),
            "Dashboard stats fetched successfully",
            read_only=True,
        )

    def clear_reports(self) -> None:
        self._store.clear_documents()

    async def fetch_report(
        self,
        name: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> OperationResult:
        """Dispatch by report name; date bounds apply to ranged reports only."""
        if name == "sales":
            return await self.fetch_sales_report(start_date, end_date)
        if name == "repairs":
            return await self.fetch_repairs_report(start_date, end_date)
        if name == "inventory":
            return await self.fetch_inventory_report()
        if name == "customers":
            return await self.fetch_customer_report()
        if name == "dashboard":
            return await self.fetch_dashboard_stats()
        raise EntityNotFoundError("Report", name)
