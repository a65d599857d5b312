"""Repository for cards."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.kanban.models import BoardColumn, Card
from src.kanban.models.base import utc_now
from src.kanban.repositories.base import BaseRepository


class CardRepository(BaseRepository[Card]):
    model = Card

    async def list_by_columns(self, column_ids: Sequence[UUID]) -> list[Card]:
        """Cards of the given columns in display order; ties fall back to creation order."""
        if not column_ids:
            return []
        result = await self.session.execute(
            select(Card)
            .where(Card.column_id.in_(column_ids))  # type: ignore[attr-defined]
            .order_by(Card.position, Card.created_at, Card.id)
        )
        return list(result.scalars().all())

    async def get_project_id(self, card_id: UUID) -> UUID | None:
        """Resolve the project a card belongs to through its column."""
        result = await self.session.execute(
            select(BoardColumn.project_id)
            .join(Card, Card.column_id == BoardColumn.id)  # type: ignore[arg-type]
            .where(Card.id == card_id)
        )
        return result.scalar_one_or_none()

    async def move(self, card_id: UUID, column_id: UUID, position: int) -> bool:
        """Set column and position in a single UPDATE.

        The card is never observable in zero or two columns. Siblings are not
        renumbered.

        Returns:
            False if the card does not exist.
        """
        result = await self.session.execute(
            update(Card)
            .where(Card.id == card_id)  # type: ignore[arg-type]
            .values(column_id=column_id, position=position, updated_at=utc_now())
        )
        return bool(result.rowcount)
