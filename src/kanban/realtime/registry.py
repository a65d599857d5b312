"""Connection Registry - which live connections follow which project."""

import asyncio
from uuid import UUID

from prometheus_client import Gauge

from src.kanban.core.exceptions import TransportError
from src.kanban.core.logging import get_logger
from src.kanban.realtime.connection import Subscriber

logger = get_logger(__name__)

LIVE_CONNECTIONS = Gauge(
    "kanban_ws_connections",
    "WebSocket connections currently subscribed to a project",
)

# Going Away
SHUTDOWN_CLOSE_CODE = 1001


class ProjectChannel:
    """Subscribers of one project plus the lock that orders fan-out to them."""

    def __init__(self) -> None:
        self.subscribers: set[Subscriber] = set()
        self.lock = asyncio.Lock()


class ConnectionRegistry:
    """Maps project id to the set of subscribed connections.

    Created with the application and closed at shutdown. subscribe and
    unsubscribe never await, so they are atomic under the event loop.
    """

    def __init__(self) -> None:
        self._channels: dict[UUID, ProjectChannel] = {}

    def subscribe(self, project_id: UUID, subscriber: Subscriber) -> None:
        channel = self._channels.get(project_id)
        if channel is None:
            channel = self._channels[project_id] = ProjectChannel()
        if subscriber not in channel.subscribers:
            channel.subscribers.add(subscriber)
            LIVE_CONNECTIONS.inc()
        logger.info(
            "Subscriber registered",
            project_id=str(project_id),
            connection_id=subscriber.connection_id,
            subscribers=len(channel.subscribers),
        )

    def unsubscribe(self, project_id: UUID, subscriber: Subscriber) -> None:
        """Remove a subscriber; the project entry goes away with its last one."""
        channel = self._channels.get(project_id)
        if channel is None or subscriber not in channel.subscribers:
            return
        channel.subscribers.discard(subscriber)
        LIVE_CONNECTIONS.dec()
        if not channel.subscribers:
            del self._channels[project_id]
        logger.info(
            "Subscriber removed",
            project_id=str(project_id),
            connection_id=subscriber.connection_id,
            subscribers=len(channel.subscribers),
        )

    def channel(self, project_id: UUID) -> ProjectChannel | None:
        return self._channels.get(project_id)

    def subscribers(self, project_id: UUID) -> list[Subscriber]:
        """Snapshot of a project's subscribers."""
        channel = self._channels.get(project_id)
        return list(channel.subscribers) if channel else []

    def __contains__(self, project_id: object) -> bool:
        return project_id in self._channels

    @property
    def project_count(self) -> int:
        return len(self._channels)

    @property
    def connection_count(self) -> int:
        return sum(len(c.subscribers) for c in self._channels.values())

    async def close_all(self, code: int = SHUTDOWN_CLOSE_CODE) -> None:
        """Close every subscribed socket and forget all projects."""
        channels = list(self._channels.items())
        self._channels.clear()
        closed = 0
        for project_id, channel in channels:
            for subscriber in channel.subscribers:
                try:
                    await subscriber.close(code)
                    closed += 1
                except TransportError as e:
                    logger.warning(
                        "Failed to close subscriber",
                        project_id=str(project_id),
                        connection_id=subscriber.connection_id,
                        error=str(e),
                    )
                LIVE_CONNECTIONS.dec()
        logger.info("Connection registry closed", closed=closed, projects=len(channels))
