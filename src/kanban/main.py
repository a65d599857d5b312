from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.kanban.api.middlewares import setup_middlewares
from src.kanban.api.v1.router import api_router
from src.kanban.api.ws import board_socket
from src.kanban.core.config import get_settings
from src.kanban.core.db import dispose_engine
from src.kanban.core.exceptions import setup_exception_handlers
from src.kanban.core.health import setup_health_endpoint, setup_metrics
from src.kanban.core.logging import get_logger, setup_logging
from src.kanban.realtime import BroadcastDispatcher, ConnectionRegistry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info("Starting application", app_name=settings.app_name, env=settings.app_env)

    yield

    logger.info(
        "Shutdown initiated",
        projects=app.state.registry.project_count,
        connections=app.state.registry.connection_count,
    )
    await app.state.registry.close_all()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "users", "description": "Board users"},
    {"name": "projects", "description": "Projects and full board state"},
    {"name": "columns", "description": "Columns and their ordering"},
    {"name": "cards", "description": "Cards, moves and reorders"},
    {"name": "labels", "description": "Project tags and entities"},
    {"name": "card content", "description": "Checklist items, comments and attachments"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Collaborative kanban boards with live WebSocket synchronization",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        lifespan=lifespan,
    )

    # One registry per application; the dispatcher and routes read it from app.state
    app.state.registry = ConnectionRegistry()
    app.state.dispatcher = BroadcastDispatcher(
        app.state.registry, send_timeout=settings.ws_send_timeout_seconds
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)
    app.add_api_websocket_route(settings.ws_path, board_socket, name="board_socket")
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_dir),
        name="uploads",
    )

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
