"""Live board synchronization over WebSockets."""

from src.kanban.realtime.connection import Subscriber, parse_project_id
from src.kanban.realtime.dispatcher import BroadcastDispatcher
from src.kanban.realtime.registry import ConnectionRegistry

__all__ = [
    "BroadcastDispatcher",
    "ConnectionRegistry",
    "Subscriber",
    "parse_project_id",
]
