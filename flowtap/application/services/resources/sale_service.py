"""Point-of-sale service.

Sales are append-only on the API: there is no update or delete, and
payments are recorded through a dedicated endpoint.
"""

from collections.abc import Mapping
from typing import Any

from flowtap.application.interfaces import Transport
from flowtap.application.services.entity_store import EntityStore
from flowtap.application.services.mutation_rules import document_rule, update_rule
from flowtap.application.services.request_lifecycle import (
    OperationResult,
    RequestLifecycleController,
)
from flowtap.application.services.resources.base import ResourceEndpoints, ResourceService

RECEIPT_DOCUMENT = "receipt"


class SaleService(ResourceService):
    def __init__(
        self,
        store: EntityStore,
        transport: Transport,
        lifecycle: RequestLifecycleController,
    ) -> None:
        super().__init__(
            store,
            transport,
            lifecycle,
            ResourceEndpoints(
                collection="/pos/sales",
                operations=frozenset({"list_all", "get_by_id", "create"}),
            ),
            singular="Sale",
            plural="Sales",
        )

    async def create_sale(self, payload: Mapping[str, Any]) -> OperationResult:
        return await self.create(payload)

    async def process_payment(
        self, sale_id: Any, payment: Mapping[str, Any]
    ) -> OperationResult:
        return await self._run(
            "processPayment",
            lambda: self._transport.post(self._item_path(sale_id, "payment"), dict(payment)),
            update_rule(sale_id),
            "Payment processed successfully",
        )

    async def get_receipt(self, sale_id: Any) -> OperationResult:
        return await self._run(
            "getReceipt",
            lambda: self._transport.get(self._item_path(sale_id, "receipt")),
            document_rule(RECEIPT_DOCUMENT),
            "Receipt fetched successfully",
            read_only=True,
        )
