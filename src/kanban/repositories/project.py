"""Repository for Project entity."""

from uuid import UUID

from sqlmodel import select

from src.kanban.models import Project
from src.kanban.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def list_by_owner(
        self,
        owner_id: UUID,
        cursor: str | None = None,
        limit: int = 50,
    ) -> tuple[list[Project], str | None, bool]:
        """List a user's projects, most recently updated first.

        Args:
            owner_id: Owning user
            cursor: Optional cursor for pagination
            limit: Maximum number of results

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        query = select(Project).where(Project.owner_id == owner_id)
        return await self.paginate(query, cursor, limit, Project.updated_at)
