"""Repair ticket service."""

from typing import Any

from flowtap.application.interfaces import Transport
from flowtap.application.services.entity_store import EntityStore
from flowtap.application.services.mutation_rules import update_rule
from flowtap.application.services.request_lifecycle import (
    OperationResult,
    RequestLifecycleController,
)
from flowtap.application.services.resources.base import ResourceEndpoints, ResourceService


class RepairService(ResourceService):
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
            ResourceEndpoints(collection="/repairs"),
            singular="Repair",
            plural="Repairs",
        )

    async def update_status(self, repair_id: Any, status: str) -> OperationResult:
        return await self._run(
            "updateStatus",
            lambda: self._transport.patch(
                self._item_path(repair_id, "status"), {"status": status}
            ),
            update_rule(repair_id),
            "Repair status updated successfully",
        )
