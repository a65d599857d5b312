"""Repository for the activity log."""

from uuid import UUID

from sqlmodel import select

from src.kanban.models import ActivityLog
from src.kanban.repositories.base import BaseRepository


class ActivityLogRepository(BaseRepository[ActivityLog]):
    model = ActivityLog

    async def list_by_project(
        self,
        project_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[ActivityLog], str | None, bool]:
        query = select(ActivityLog).where(ActivityLog.project_id == project_id)
        return await self.paginate(query, cursor, limit, ActivityLog.created_at)

    async def list_by_card(
        self,
        card_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[ActivityLog], str | None, bool]:
        query = select(ActivityLog).where(ActivityLog.card_id == card_id)
        return await self.paginate(query, cursor, limit, ActivityLog.created_at)
