"""Board error taxonomy and the exception handlers that translate it to HTTP."""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.kanban.core.logging import get_logger

logger = get_logger(__name__)


class BoardError(Exception):
    """Base class for errors raised by the board services."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_content(self) -> dict[str, Any]:
        return {"detail": self.detail}


class ValidationError(BoardError):
    """Malformed or missing input field."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str, detail: str):
        super().__init__(detail)
        self.field = field

    def to_content(self) -> dict[str, Any]:
        return {"detail": self.detail, "field": self.field}


class NotFoundError(BoardError):
    """Referenced id does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, id: Any):
        super().__init__(f"{resource} {id} not found")
        self.resource = resource
        self.id = id


class UnsupportedMediaTypeError(BoardError):
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE


class PayloadTooLargeError(BoardError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class PersistenceError(BoardError):
    """Storage-layer failure. Never retried."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class TransportError(BoardError):
    """Connection-level failure on a WebSocket. Never surfaced to other clients."""


def _first_error_field(exc: RequestValidationError) -> str:
    for error in exc.errors():
        # loc is ("body" | "query" | "path", field, ...)
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if loc:
            return ".".join(loc)
    return "body"


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(BoardError)
    async def board_error_handler(request: Request, exc: BoardError) -> JSONResponse:
        if isinstance(exc, PersistenceError):
            logger.error(
                "Persistence failure",
                path=request.url.path,
                error=exc.detail,
                cause=repr(exc.__cause__) if exc.__cause__ else None,
            )
        content = exc.to_content()
        content["request_id"] = correlation_id.get()
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        field = _first_error_field(exc)
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid input") if errors else "Invalid input"
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": f"Invalid value for '{field}': {message}",
                "field": field,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
