"""Database engine management."""

from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from src.kanban.core.config import get_settings

_engine: AsyncEngine | None = None
_sync_engine: Engine | None = None


def _get_engine_kwargs() -> dict[str, Any]:
    """Pool sizing only applies to server databases.

    SQLite connections are opened per checkout so that sessions created on
    different event loops (tests, the WebSocket test client) never share one.
    """
    settings = get_settings()
    if settings.is_sqlite:
        return {"poolclass": NullPool}
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_pre_ping": True,
    }


def get_engine() -> AsyncEngine:
    """Get or create the database engine singleton."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, **_get_engine_kwargs())
    return _engine


async def dispose_engine() -> None:
    """Dispose the database engine. Call during shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


def get_sync_url(url: str) -> str:
    """Convert an async driver URL to its sync counterpart (asyncpg -> psycopg2)."""
    return url.replace("+asyncpg", "").replace("+aiosqlite", "")


def get_sync_engine() -> Engine:
    """Get or create synchronous database engine singleton.

    Used by Alembic, which runs migrations with a blocking driver.
    """
    global _sync_engine
    if _sync_engine is None:
        settings = get_settings()
        _sync_engine = create_engine(get_sync_url(settings.database_url), pool_pre_ping=True)
    return _sync_engine


def dispose_sync_engine() -> None:
    """Dispose of the sync engine."""
    global _sync_engine
    if _sync_engine is not None:
        _sync_engine.dispose()
        _sync_engine = None
