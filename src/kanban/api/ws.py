"""WebSocket endpoint: one connection follows one project board."""

from typing import Annotated

from fastapi import Query, WebSocket
from starlette.websockets import WebSocketDisconnect

from src.kanban.api.dependencies import Dispatcher, Registry
from src.kanban.core.logging import bind_connection_context, clear_request_context, get_logger
from src.kanban.realtime import Subscriber, parse_project_id

logger = get_logger(__name__)


async def board_socket(
    websocket: WebSocket,
    registry: Registry,
    dispatcher: Dispatcher,
    project_id: Annotated[str | None, Query(alias="projectId")] = None,
) -> None:
    """Subscribe to a project's events and relay client messages to it.

    Without a valid `projectId` the connection stays open but inert: it is
    registered nowhere and its messages are dropped.
    """
    await websocket.accept()
    subscriber = Subscriber(websocket, parse_project_id(project_id))

    clear_request_context()
    bind_connection_context(subscriber.connection_id, subscriber.project_id)
    if subscriber.project_id is not None:
        registry.subscribe(subscriber.project_id, subscriber)
    else:
        logger.warning("WebSocket connected without a valid projectId", raw_project_id=project_id)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.info("WebSocket disconnected", code=message.get("code"))
                break
            text = message.get("text")
            if text is None:
                logger.info("Dropped binary message", size=len(message.get("bytes") or b""))
                continue
            await dispatcher.relay(subscriber, text)
    except WebSocketDisconnect as e:
        logger.info("WebSocket disconnected", code=e.code)
    finally:
        if subscriber.project_id is not None:
            registry.unsubscribe(subscriber.project_id, subscriber)
        clear_request_context()
