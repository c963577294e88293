"""Base application services binding an entity store to its API endpoints."""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from flowtap.application.interfaces import Transport
from flowtap.application.schemas.envelope import PaginationSchema
from flowtap.application.services.entity_store import EntityStore
from flowtap.application.services.mutation_rules import (
    MutationRule,
    create_rule,
    delete_rule,
    get_by_id_rule,
    list_all_rule,
    search_rule,
    update_rule,
)
from flowtap.application.services.request_lifecycle import (
    Operation,
    OperationResult,
    RequestLifecycleController,
)
from flowtap.domain.entities import EntityRecord
from flowtap.domain.exceptions import UnsupportedOperationError

CRUD_OPERATIONS = frozenset({"list_all", "get_by_id", "create", "update", "delete"})


def join_path(*parts: Any) -> str:
    """Build ``/a/b/c`` with each dynamic segment URL-quoted."""
    segments = [str(parts[0]).rstrip("/")]
    segments.extend(quote(str(p), safe="") for p in parts[1:])
    return "/".join(segments)


@dataclass(frozen=True)
class ResourceEndpoints:
    """Where a kind lives on the API and which operations it offers."""

    collection: str
    search: str | None = None
    search_param: str = "q"
    operations: frozenset[str] = field(default=CRUD_OPERATIONS)

    def supports(self, operation: str) -> bool:
        if operation == "search":
            return self.search is not None
        return operation in self.operations


class StoreService:
    """Runs named operations for one store through the lifecycle controller."""

    def __init__(
        self,
        store: EntityStore,
        transport: Transport,
        lifecycle: RequestLifecycleController,
    ) -> None:
        self._store = store
        self._transport = transport
        self._lifecycle = lifecycle

    @property
    def store(self) -> EntityStore:
        return self._store

    async def _run(
        self,
        action: str,
        call: Callable[[], Awaitable[Any]],
        rule: MutationRule,
        message: str,
        *,
        read_only: bool = False,
        fallback_pagination: PaginationSchema | None = None,
    ) -> OperationResult:
        """Run one named operation; ``message`` is the success literal.

        The literal is used only when the response body carries no message
        field. ``HttpxTransport`` stamps ``_message`` (``"Success"`` when the
        server sends none) on every 2xx mapping body, so over HTTP the literal shows
        up only for bare-list bodies; other transports surface it directly.
        """
        operation = Operation(
            name=f"{self._store.kind}/{action}",
            call=call,
            rule=rule,
            default_message=message,
            read_only=read_only,
            fallback_pagination=fallback_pagination,
        )
        return await self._lifecycle.run(self._store, operation)

    def clear_error(self) -> None:
        self._store.clear_error()

    def clear_message(self) -> None:
        self._store.clear_message()


class ResourceService(StoreService):
    """Uniform list/get/create/update/delete/search surface over one entity kind."""

    def __init__(
        self,
        store: EntityStore,
        transport: Transport,
        lifecycle: RequestLifecycleController,
        endpoints: ResourceEndpoints,
        *,
        singular: str,
        plural: str,
    ) -> None:
        super().__init__(store, transport, lifecycle)
        self._endpoints = endpoints
        self._singular = singular
        self._plural = plural

    @property
    def endpoints(self) -> ResourceEndpoints:
        return self._endpoints

    def _require(self, operation: str) -> None:
        if not self._endpoints.supports(operation):
            raise UnsupportedOperationError(self._store.kind, operation)

    def _item_path(self, entity_id: Any, *suffix: str) -> str:
        return join_path(self._endpoints.collection, entity_id, *suffix)

    async def list_all(self, params: Mapping[str, Any] | None = None) -> OperationResult:
        self._require("list_all")
        query = dict(params or {})
        defaults = self._store.default_pagination
        fallback = PaginationSchema(
            page=query.get("page") or defaults.page,
            limit=query.get("limit") or defaults.limit,
            total=0,
        )
        return await self._run(
            "fetchAll",
            lambda: self._transport.get(self._endpoints.collection, query or None),
            list_all_rule(),
            f"{self._plural} fetched successfully",
            read_only=True,
            fallback_pagination=fallback,
        )

    async def get_by_id(self, entity_id: Any) -> OperationResult:
        self._require("get_by_id")
        return await self._run(
            "fetchById",
            lambda: self._transport.get(self._item_path(entity_id)),
            get_by_id_rule(),
            f"{self._singular} fetched successfully",
            read_only=True,
        )

    async def create(self, payload: Mapping[str, Any]) -> OperationResult:
        self._require("create")
        return await self._run(
            "create",
            lambda: self._transport.post(self._endpoints.collection, dict(payload)),
            create_rule(),
            f"{self._singular} created successfully",
        )

    async def update(self, entity_id: Any, payload: Mapping[str, Any]) -> OperationResult:
        self._require("update")
        return await self._run(
            "update",
            lambda: self._transport.put(self._item_path(entity_id), dict(payload)),
            update_rule(entity_id),
            f"{self._singular} updated successfully",
        )

    async def delete(self, entity_id: Any) -> OperationResult:
        self._require("delete")
        return await self._run(
            "delete",
            lambda: self._transport.delete(self._item_path(entity_id)),
            delete_rule(entity_id),
            f"{self._singular} deleted successfully",
        )

    async def search(self, query: str) -> OperationResult:
        self._require("search")
        return await self._run(
            "search",
            lambda: self._transport.get(
                self._endpoints.search, {self._endpoints.search_param: query}
            ),
            search_rule(),
            "Search completed successfully",
            read_only=True,
        )

    def set_selected(self, record: EntityRecord | None) -> None:
        self._store.set_selected(record)
