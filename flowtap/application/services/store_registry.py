"""Store registry and the application context built around it."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from flowtap.application.interfaces import Notifier, Transport
from flowtap.application.services.entity_store import EntityStore
from flowtap.application.services.notification_bridge import NotificationBridge
from flowtap.application.services.request_lifecycle import RequestLifecycleController
from flowtap.domain.exceptions import EntityNotFoundError


class StoreRegistry:
    """Holds one EntityStore per entity kind, in registration order."""

    def __init__(self) -> None:
        self._stores: dict[str, EntityStore] = {}

    def register(self, store: EntityStore) -> EntityStore:
        if store.kind in self._stores:
            raise ValueError(f"A store for '{store.kind}' is already registered")
        self._stores[store.kind] = store
        return store

    def get(self, kind: str) -> EntityStore:
        try:
            return self._stores[str(kind)]
        except KeyError:
            raise EntityNotFoundError("EntityStore", str(kind)) from None

    def kinds(self) -> list[str]:
        return list(self._stores)

    def __contains__(self, kind: object) -> bool:
        return str(kind) in self._stores

    def __iter__(self) -> Iterator[EntityStore]:
        return iter(list(self._stores.values()))

    def __len__(self) -> int:
        return len(self._stores)


@dataclass
class AppContext:
    """Everything the presentation layer needs, assembled by the composition root."""

    registry: StoreRegistry
    lifecycle: RequestLifecycleController
    transport: Transport
    bridge: NotificationBridge
    notifier: Notifier
    services: dict[str, Any] = field(default_factory=dict)
    broadcaster: Any = None

    def service(self, kind: str) -> Any:
        try:
            return self.services[str(kind)]
        except KeyError:
            raise EntityNotFoundError("Service", str(kind)) from None
