"""A live WebSocket connection as seen by the registry and dispatcher."""

from uuid import UUID, uuid4

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from src.kanban.core.exceptions import TransportError


def parse_project_id(raw: str | None) -> UUID | None:
    """Project id from the `projectId` query parameter, or None if absent or malformed."""
    if not raw:
        return None
    try:
        return UUID(raw)
    except ValueError:
        return None


class Subscriber:
    """Wraps a WebSocket subscribed to at most one project for its lifetime.

    Transport failures surface as TransportError so callers never depend on
    the ASGI server's own exception types.
    """

    def __init__(self, websocket: WebSocket, project_id: UUID | None):
        self.websocket = websocket
        self.project_id = project_id
        self.connection_id = uuid4().hex[:12]

    def __repr__(self) -> str:
        return f"Subscriber(connection_id={self.connection_id!r}, project_id={self.project_id!s})"

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send_text(self, message: str) -> None:
        try:
            await self.websocket.send_text(message)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            raise TransportError(f"Send failed: {e!r}") from e

    async def close(self, code: int = 1000) -> None:
        if not self.is_open:
            return
        try:
            await self.websocket.close(code=code)
        except (RuntimeError, OSError) as e:
            raise TransportError(f"Close failed: {e!r}") from e
