"""Access to the application's connection registry and dispatcher."""

from typing import Annotated

from fastapi import Depends
from starlette.requests import HTTPConnection

from src.kanban.realtime import BroadcastDispatcher, ConnectionRegistry


def get_registry(connection: HTTPConnection) -> ConnectionRegistry:
    """Registry created by create_app; works for HTTP and WebSocket routes."""
    return connection.app.state.registry


def get_dispatcher(connection: HTTPConnection) -> BroadcastDispatcher:
    return connection.app.state.dispatcher


Registry = Annotated[ConnectionRegistry, Depends(get_registry)]
Dispatcher = Annotated[BroadcastDispatcher, Depends(get_dispatcher)]
