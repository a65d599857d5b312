"""HTTP middlewares: correlation ids, CORS and the structlog request context."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.kanban.core.config import Settings

from .logging_context import logging_context_middleware

__all__ = [
    "setup_middlewares",
    "logging_context_middleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Install the middleware stack. The last one added wraps all the others.

    WebSocket upgrades bypass the `http` middleware, so socket handlers bind
    their own log context.
    """

    @app.middleware("http")
    async def _logging_context(request, call_next):  # type: ignore[no-untyped-def]
        return await logging_context_middleware(request, call_next)

    # Browsers send X-User-ID as the acting user and read back X-Request-ID
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "X-Request-ID", "X-User-ID"],
        expose_headers=["X-Request-ID"],
    )

    # Outermost, so the request id exists before logging context is bound
    app.add_middleware(CorrelationIdMiddleware)
