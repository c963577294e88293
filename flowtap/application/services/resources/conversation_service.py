"""Chat service: conversations as the collection, messages as per-conversation children."""

from typing import Any

from flowtap.application.interfaces import Transport
from flowtap.application.services.entity_store import EntityStore
from flowtap.application.services.mutation_rules import child_append_rule, children_rule
from flowtap.application.services.request_lifecycle import (
    OperationResult,
    RequestLifecycleController,
)
from flowtap.application.services.resources.base import ResourceEndpoints, ResourceService
from flowtap.domain.entities import EntityRecord


class ConversationService(ResourceService):
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
                collection="/chat/conversations",
                operations=frozenset({"list_all", "create"}),
            ),
            singular="Conversation",
            plural="Conversations",
        )

    async def fetch_messages(self, conversation_id: Any) -> OperationResult:
        return await self._run(
            "fetchMessages",
            lambda: self._transport.get(self._item_path(conversation_id, "messages")),
            children_rule(conversation_id),
            "Messages fetched successfully",
            read_only=True,
        )

    async def send_message(self, conversation_id: Any, message: str) -> OperationResult:
        return await self._run(
            "sendMessage",
            lambda: self._transport.post(
                self._item_path(conversation_id, "messages"), {"message": message}
            ),
            child_append_rule(conversation_id),
            "Message sent successfully",
        )

    def add_message(self, conversation_id: Any, message: EntityRecord) -> None:
        """Append a message pushed from elsewhere (e.g. a realtime channel) without a request."""
        self._store.add_child(conversation_id, message)
