"""Inventory service. Records are stock items."""

from typing import Any

from flowtap.application.interfaces import Transport
from flowtap.application.services.entity_store import EntityStore
from flowtap.application.services.mutation_rules import update_rule
from flowtap.application.services.request_lifecycle import (
    OperationResult,
    RequestLifecycleController,
)
from flowtap.application.services.resources.base import ResourceEndpoints, ResourceService


class InventoryService(ResourceService):
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
            ResourceEndpoints(collection="/inventory"),
            singular="Item",
            plural="Inventory",
        )

    async def update_stock(self, item_id: Any, quantity: int) -> OperationResult:
        """Set the on-hand quantity of one item; the returned item replaces the cached one."""
        return await self._run(
            "updateStock",
            lambda: self._transport.patch(
                self._item_path(item_id, "stock"), {"quantity": quantity}
            ),
            update_rule(item_id),
            "Stock updated successfully",
        )
