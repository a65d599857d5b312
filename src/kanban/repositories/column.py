"""Repository for board columns."""

from uuid import UUID

from sqlmodel import select

from src.kanban.models import BoardColumn
from src.kanban.repositories.base import BaseRepository


class ColumnRepository(BaseRepository[BoardColumn]):
    model = BoardColumn

    async def list_by_project(self, project_id: UUID) -> list[BoardColumn]:
        """Columns in display order; ties fall back to creation order."""
        result = await self.session.execute(
            select(BoardColumn)
            .where(BoardColumn.project_id == project_id)
            .order_by(BoardColumn.position, BoardColumn.created_at, BoardColumn.id)
        )
        return list(result.scalars().all())
