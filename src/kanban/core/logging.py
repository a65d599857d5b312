"""structlog setup and the per-request / per-connection log context.

HTTP requests bind `request_id`; WebSocket connections bind `connection_id`
and `project_id`. Both go through contextvars, so concurrent handlers never
see each other's fields.
"""

import logging
import sys
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Chatty third-party loggers capped at WARNING
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "aiosqlite", "websockets")


def setup_logging(debug: bool = False) -> None:
    """Route structlog through stdlib logging to stdout.

    Debug mode renders colored console lines; otherwise every event is one
    JSON object per line.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    renderer: structlog.typing.Processor = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Attach the correlation id to every log line of the current request."""
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_connection_context(connection_id: str, project_id: UUID | None) -> None:
    """Attach a live socket's identity to every log line of its handler task.

    Args:
        connection_id: Short identifier of the live connection.
        project_id: The project the connection is subscribed to, if any.
    """
    bind_contextvars(connection_id=connection_id)
    if project_id is not None:
        bind_contextvars(project_id=str(project_id))


def clear_request_context() -> None:
    clear_contextvars()
