"""Liveness report and Prometheus exposition."""

import os
import secrets
import time
from pathlib import Path
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.kanban.core.config import get_settings
from src.kanban.core.db import get_session
from src.kanban.core.logging import get_logger

logger = get_logger(__name__)


async def _database_status() -> str:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check database failure", error=str(e))
        return f"unhealthy: {e!s}"
    return "healthy"


def _uploads_status(directory: str) -> str:
    path = Path(directory)
    if not path.is_dir():
        return "missing"
    return "healthy" if os.access(path, os.W_OK) else "read-only"


def setup_health_endpoint(app: FastAPI) -> None:
    @app.get("/health")
    async def health(request: Request) -> JSONResponse:
        """Database reachability, upload directory and live WebSocket counts.

        Only the database decides the status code; a broken upload directory
        still lets boards load and sync.
        """
        registry = request.app.state.registry
        report: dict[str, Any] = {
            "database": await _database_status(),
            "uploads": _uploads_status(get_settings().upload_dir),
            "websocket": {
                "projects": registry.project_count,
                "connections": registry.connection_count,
            },
            "timestamp": time.time(),
        }
        healthy = report["database"] == "healthy"
        report["status"] = "healthy" if healthy else "unhealthy"
        return JSONResponse(content=report, status_code=200 if healthy else 503)


def setup_metrics(app: FastAPI) -> None:
    """Expose /metrics, behind X-Metrics-Key when METRICS_API_KEY is set.

    Board counters (live connections, delivered messages, send failures) are
    registered by the realtime package on the default registry and show up
    next to the HTTP metrics.
    """
    expected = get_settings().metrics_api_key
    instrumentator = Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app)
    if not expected:
        instrumentator.expose(app, endpoint="/metrics")
        return

    metrics_key = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def require_metrics_key(api_key: str | None = Depends(metrics_key)) -> None:
        if api_key is None or not secrets.compare_digest(api_key, expected):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(require_metrics_key)])
