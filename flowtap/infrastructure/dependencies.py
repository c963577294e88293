"""Composition root and FastAPI dependency injection.

``build_app_context`` wires one store and one service per entity kind to a
shared transport, lifecycle controller and notification bridge. The
presentation layer receives the result through ``app.state.context``.
"""

import logging

from fastapi import Request

from flowtap.application.interfaces import Notifier, Transport
from flowtap.application.services import (
    AppContext,
    ConversationService,
    CustomerService,
    EmployeeService,
    EntityStore,
    InventoryService,
    NotificationBridge,
    RepairService,
    ReportService,
    RequestLifecycleController,
    SaleService,
    SettingsService,
    StoreRegistry,
)
from flowtap.config import Settings, get_settings
from flowtap.domain.entities import EntityKind, Pagination
from flowtap.infrastructure.http import HttpxTransport
from flowtap.infrastructure.notifications import (
    CompositeNotifier,
    LoggingNotifier,
    NotificationBroadcaster,
)

logger = logging.getLogger(__name__)

SERVICE_CLASSES = {
    EntityKind.CUSTOMERS: CustomerService,
    EntityKind.INVENTORY: InventoryService,
    EntityKind.REPAIRS: RepairService,
    EntityKind.EMPLOYEES: EmployeeService,
    EntityKind.SALES: SaleService,
    EntityKind.CONVERSATIONS: ConversationService,
    EntityKind.REPORTS: ReportService,
    EntityKind.SETTINGS: SettingsService,
}


def build_app_context(
    settings: Settings | None = None,
    transport: Transport | None = None,
    notifier: Notifier | None = None,
) -> AppContext:
    """Assemble stores, services and the notification pipeline.

    ``transport`` is injectable for tests; by default an HttpxTransport
    against ``api_base_url`` is used. Notifications always go to the SSE
    broadcaster and the log, plus ``notifier`` when one is given.
    """
    settings = settings or get_settings()

    if transport is None:
        transport = HttpxTransport(
            settings.api_base_url,
            token=settings.api_token or None,
            timeout=settings.api_timeout,
        )

    broadcaster = NotificationBroadcaster(queue_size=settings.notification_queue_size)
    extra = [notifier] if notifier is not None else []
    notifier = CompositeNotifier(broadcaster, LoggingNotifier(), *extra)

    bridge = NotificationBridge(
        notifier,
        success_title=settings.notification_success_title,
        error_title=settings.notification_error_title,
        auto_clear=settings.notification_auto_clear,
    )
    lifecycle = RequestLifecycleController()
    registry = StoreRegistry()
    services = {}

    for kind, service_cls in SERVICE_CLASSES.items():
        store = registry.register(
            EntityStore(
                kind.value,
                default_pagination=Pagination(
                    page=settings.default_page,
                    limit=settings.default_page_limit,
                ),
            )
        )
        bridge.attach(store)
        services[kind.value] = service_cls(store, transport, lifecycle)

    logger.info(
        "App context ready — %d stores, api=%s", len(registry), settings.api_base_url
    )
    return AppContext(
        registry=registry,
        lifecycle=lifecycle,
        transport=transport,
        bridge=bridge,
        notifier=notifier,
        services=services,
        broadcaster=broadcaster,
    )


def get_app_context(request: Request) -> AppContext:
    """Provides the AppContext held on the running application."""
    return request.app.state.context
