"""Customer directory service."""

from flowtap.application.interfaces import Transport
from flowtap.application.services.entity_store import EntityStore
from flowtap.application.services.request_lifecycle import RequestLifecycleController
from flowtap.application.services.resources.base import ResourceEndpoints, ResourceService


class CustomerService(ResourceService):
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
            ResourceEndpoints(collection="/customers", search="/customers/search"),
            singular="Customer",
            plural="Customers",
        )
