"""Broadcast Dispatcher - fan-out of board events and client relay messages."""

import asyncio
import json
from datetime import UTC, datetime
from uuid import UUID

from prometheus_client import Counter

from src.kanban.core.exceptions import TransportError
from src.kanban.core.logging import get_logger
from src.kanban.realtime.connection import Subscriber
from src.kanban.realtime.registry import ConnectionRegistry
from src.kanban.schemas.events import BoardEvent

logger = get_logger(__name__)

# Internal Error: a send cancelled mid-frame leaves the stream unusable
STALLED_CLOSE_CODE = 1011

MESSAGES_DELIVERED = Counter(
    "kanban_ws_messages_delivered_total",
    "Messages delivered to WebSocket subscribers",
    ["kind"],
)
SEND_FAILURES = Counter(
    "kanban_ws_send_failures_total",
    "Sends to WebSocket subscribers that failed or timed out",
)


class BroadcastDispatcher:
    """Delivers messages to every open subscriber of a project.

    Fan-out for one project holds that project's lock, so each subscriber
    sees messages in the order the dispatcher was called. Failed sends are
    logged and skipped. A send that times out is closed with 1011 so its
    endpoint unsubscribes it. Nothing here raises to the caller.
    """

    def __init__(self, registry: ConnectionRegistry, send_timeout: float = 5.0):
        self.registry = registry
        self.send_timeout = send_timeout

    async def broadcast(self, project_id: UUID, event: BoardEvent) -> int:
        """Send a board event to the project's subscribers.

        Returns:
            Number of subscribers the event was delivered to.
        """
        message = event.model_dump_json()
        delivered = await self._fan_out(project_id, message)
        MESSAGES_DELIVERED.labels(kind="event").inc(delivered)
        logger.debug(
            "Event broadcast",
            project_id=str(project_id),
            event_type=event.type,
            delivered=delivered,
        )
        return delivered

    async def relay(self, subscriber: Subscriber, raw: str) -> int:
        """Stamp a client message with the server time and send it to the whole project.

        The sender receives its own message too. Malformed input and messages
        from connections without a project are logged and dropped.
        """
        if subscriber.project_id is None:
            logger.info("Dropped message from unsubscribed connection", size=len(raw))
            return 0
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Dropped malformed message", error=str(e), size=len(raw))
            return 0
        if not isinstance(payload, dict):
            logger.warning("Dropped non-object message", kind=type(payload).__name__)
            return 0

        payload["timestamp"] = datetime.now(UTC).isoformat()
        delivered = await self._fan_out(subscriber.project_id, json.dumps(payload))
        MESSAGES_DELIVERED.labels(kind="relay").inc(delivered)
        return delivered

    async def _fan_out(self, project_id: UUID, message: str) -> int:
        channel = self.registry.channel(project_id)
        if channel is None:
            return 0

        delivered = 0
        async with channel.lock:
            for subscriber in list(channel.subscribers):
                # Closed sockets stay registered until their endpoint unsubscribes
                if not subscriber.is_open:
                    continue
                try:
                    await asyncio.wait_for(subscriber.send_text(message), self.send_timeout)
                except TransportError as e:
                    SEND_FAILURES.inc()
                    logger.warning(
                        "Send to subscriber failed",
                        project_id=str(project_id),
                        connection_id=subscriber.connection_id,
                        error=str(e),
                    )
                    continue
                except TimeoutError:
                    SEND_FAILURES.inc()
                    logger.warning(
                        "Send to subscriber timed out",
                        project_id=str(project_id),
                        connection_id=subscriber.connection_id,
                        timeout=self.send_timeout,
                    )
                    await self._close_stalled(project_id, subscriber)
                    continue
                delivered += 1
        return delivered

    async def _close_stalled(self, project_id: UUID, subscriber: Subscriber) -> None:
        try:
            await asyncio.wait_for(subscriber.close(STALLED_CLOSE_CODE), self.send_timeout)
        except (TransportError, TimeoutError) as e:
            logger.warning(
                "Failed to close stalled subscriber",
                project_id=str(project_id),
                connection_id=subscriber.connection_id,
                error=repr(e),
            )
