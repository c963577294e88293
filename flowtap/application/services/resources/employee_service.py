"""Employee roster service."""

from typing import Any

from flowtap.application.interfaces import Transport
from flowtap.application.services.entity_store import EntityStore
from flowtap.application.services.mutation_rules import update_rule
from flowtap.application.services.request_lifecycle import (
    OperationResult,
    RequestLifecycleController,
)
from flowtap.application.services.resources.base import ResourceEndpoints, ResourceService


class EmployeeService(ResourceService):
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
            ResourceEndpoints(collection="/employees"),
            singular="Employee",
            plural="Employees",
        )

    async def update_role(self, employee_id: Any, role: str) -> OperationResult:
        return await self._run(
            "updateRole",
            lambda: self._transport.patch(self._item_path(employee_id, "role"), {"role": role}),
            update_rule(employee_id),
            "Employee role updated successfully",
        )
