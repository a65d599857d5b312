"""Shared plumbing for board services: the transaction boundary and post-commit publishing."""

from collections.abc import Collection
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from src.kanban.core.exceptions import PersistenceError, ValidationError
from src.kanban.core.logging import get_logger
from src.kanban.realtime import BroadcastDispatcher
from src.kanban.schemas.events import BoardEvent

logger = get_logger(__name__)


def apply_changes(
    entity: SQLModel,
    changes: dict[str, Any],
    required: Collection[str] = (),
) -> None:
    """Copy explicitly-sent fields onto a model.

    Raises:
        ValidationError: If a field in `required` is sent as null.
    """
    for field, value in changes.items():
        if value is None and field in required:
            raise ValidationError(field, f"'{field}' cannot be null")
        if isinstance(value, Enum):
            value = value.value
        setattr(entity, field, value)


class BoardService:
    """Base for services that mutate the board.

    Repositories never commit; subclasses call `_commit` once per operation
    and publish events only after it succeeds.
    """

    def __init__(self, session: AsyncSession, dispatcher: BroadcastDispatcher | None = None):
        self.session = session
        self.dispatcher = dispatcher

    async def _commit(self, operation: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError(f"Failed to {operation}") from e

    async def _publish(self, project_id: UUID, event: BoardEvent) -> None:
        """Best-effort broadcast; a failure here never fails the mutation."""
        if self.dispatcher is None:
            return
        try:
            await self.dispatcher.broadcast(project_id, event)
        except Exception:
            logger.exception(
                "Broadcast failed",
                project_id=str(project_id),
                event_type=event.type,
            )
