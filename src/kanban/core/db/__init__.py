"""Database utilities - engine, session, migrations."""

from src.kanban.core.db.engine import (
    dispose_engine,
    dispose_sync_engine,
    get_engine,
    get_sync_engine,
    get_sync_url,
)
from src.kanban.core.db.migrations import run_migrations_sync
from src.kanban.core.db.session import get_session, get_session_factory

__all__ = [
    # Engine (async)
    "dispose_engine",
    "get_engine",
    # Engine (sync - for Alembic)
    "dispose_sync_engine",
    "get_sync_engine",
    "get_sync_url",
    # Session
    "get_session",
    "get_session_factory",
    # Migrations
    "run_migrations_sync",
]
