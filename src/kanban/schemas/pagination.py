"""Keyset pagination for newest-first feeds (projects, activity).

A cursor names the last row of the previous page by `(timestamp, id)`, so
rows sharing a timestamp are neither skipped nor repeated across pages.
Clients treat it as an opaque token.
"""

import base64
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

from src.kanban.core.exceptions import ValidationError

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Opaque cursor for the next page. None on the last page.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether there are more items after this page.",
    )


def encode_cursor(at: datetime, id: UUID) -> str:
    return base64.urlsafe_b64encode(f"{at.isoformat()}|{id}".encode()).decode()


def decode_cursor(cursor: str) -> tuple[datetime, UUID]:
    """Split a cursor back into its `(timestamp, id)` position.

    Raises:
        ValidationError: If the cursor was not produced by `encode_cursor`
    """
    try:
        at, id = base64.urlsafe_b64decode(cursor.encode()).decode().split("|", 1)
        return datetime.fromisoformat(at), UUID(id)
    except ValueError as e:
        raise ValidationError("cursor", "Invalid pagination cursor") from e
