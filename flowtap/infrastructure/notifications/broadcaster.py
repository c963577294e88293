"""Notification broadcaster — in-process SSE fan-out of one-shot notifications."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from flowtap.application.interfaces import Notifier
from flowtap.application.schemas import NotificationSchema
from flowtap.domain.entities import Notification

logger = logging.getLogger(__name__)


class NotificationBroadcaster(Notifier):
    """Manages SSE client connections and broadcasts notifications.

    Each connected client gets its own bounded asyncio.Queue. Notifying pushes
    the event to all queues without awaiting; a client whose queue is full is
    disconnected. Clients consume events via an async generator.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self._queue_size = queue_size
        self._queues: list[asyncio.Queue[str | None]] = []

    async def subscribe(self) -> AsyncGenerator[str, None]:
        """Subscribe to notification events. Yields formatted SSE strings.

        The generator automatically unsubscribes when the client disconnects.
        """
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=self._queue_size)
        self._queues.append(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    def notify(self, notification: Notification) -> None:
        payload = NotificationSchema.model_validate(notification).model_dump(mode="json")
        self.broadcast("notification", payload)

    def broadcast(self, event_type: str, data: dict) -> None:
        """Broadcast an SSE event to all connected clients."""
        sse_message = f"event: {event_type}\ndata: {json.dumps(data)}\n\n"
        dead_queues: list[asyncio.Queue[str | None]] = []

        for queue in self._queues:
            try:
                queue.put_nowait(sse_message)
            except asyncio.QueueFull:
                dead_queues.append(queue)
                logger.warning("SSE client queue full — disconnecting")

        for q in dead_queues:
            self._queues.remove(q)
            self._close_queue(q)

    async def shutdown(self) -> None:
        """Disconnect all connected clients."""
        for queue in self._queues:
            self._close_queue(queue)
        self._queues.clear()

    @staticmethod
    def _close_queue(queue: asyncio.Queue[str | None]) -> None:
        # A full queue has no room for the sentinel; drop one event first.
        if queue.full():
            queue.get_nowait()
        queue.put_nowait(None)

    @property
    def client_count(self) -> int:
        return len(self._queues)
