"""Position Store - ordered sibling sets keyed by an integer `position` column.

Columns are ordered within a project, cards within a column and checklist
items within a card. Positions are appended at `max + 1` and reassigned in
bulk by reorders; nothing here renumbers on delete or move, so readers sort
by position and never assume contiguity.
"""

from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.kanban.core.exceptions import PersistenceError
from src.kanban.core.logging import get_logger
from src.kanban.models.base import utc_now
from src.kanban.schemas.position import PositionUpdate

logger = get_logger(__name__)


def next_position(positions: Iterable[int | None]) -> int:
    """Position for a new sibling: one past the current maximum, 0 when empty."""
    existing = [p for p in positions if p is not None]
    return max(existing) + 1 if existing else 0


class PositionStore[ModelType: SQLModel]:
    """Position arithmetic for one sibling scope (e.g. cards by `column_id`)."""

    def __init__(self, session: AsyncSession, model: type[ModelType], scope_field: str):
        self.session = session
        self.model = model
        self.scope_column = getattr(model, scope_field)

    async def sibling_positions(self, scope_id: UUID) -> list[int]:
        result = await self.session.execute(
            select(self.model.position).where(self.scope_column == scope_id)  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def next_position(self, scope_id: UUID) -> int:
        return next_position(await self.sibling_positions(scope_id))

    async def reorder(self, scope_id: UUID, orders: Sequence[PositionUpdate]) -> int:
        """Apply every `(id, position)` pair in one transaction.

        Each update is scoped to `scope_id`, so ids belonging to another parent
        are silently ignored. Positions are not checked for uniqueness or
        contiguity; callers send a consistent set.

        Returns:
            Number of rows updated.

        Raises:
            PersistenceError: If any update fails. Nothing is applied in that case.
        """
        now = utc_now()
        updated = 0
        try:
            for order in orders:
                result = await self.session.execute(
                    update(self.model)
                    .where(
                        self.model.id == order.id,  # type: ignore[attr-defined]
                        self.scope_column == scope_id,
                    )
                    .values(position=order.position, updated_at=now)
                )
                updated += result.rowcount or 0
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning(
                "Reorder rolled back",
                table=self.model.__tablename__,
                scope_id=str(scope_id),
                error=str(e),
            )
            raise PersistenceError("Reorder failed; no positions were changed") from e

        logger.debug(
            "Reorder applied",
            table=self.model.__tablename__,
            scope_id=str(scope_id),
            updated=updated,
        )
        return updated
