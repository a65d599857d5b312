"""Activity log service - append-only record of board mutations."""

import contextlib
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import NotFoundError
from src.kanban.core.logging import get_logger
from src.kanban.models import ActivityAction, ActivityLog
from src.kanban.repositories import ActivityLogRepository, CardRepository, ProjectRepository

logger = get_logger(__name__)


class ActivityService:
    """Service for recording and listing activity.

    Fire-and-forget design: a failed write is logged and never blocks the
    mutation that triggered it. Uses its own session so a failure cannot
    disturb the caller's transaction.
    """

    def __init__(
        self,
        activity_repo: ActivityLogRepository,
        project_repo: ProjectRepository,
        card_repo: CardRepository,
        session: AsyncSession,
    ):
        self.activity_repo = activity_repo
        self.project_repo = project_repo
        self.card_repo = card_repo
        self.session = session

    async def record(
        self,
        action: ActivityAction | str,
        description: str,
        user_id: UUID,
        project_id: UUID | None = None,
        card_id: UUID | None = None,
        details: dict[str, Any] | None = None,
    ) -> ActivityLog | None:
        """Append an entry.

        Returns:
            The created entry, or None if recording failed
        """
        action_value = action.value if isinstance(action, ActivityAction) else action
        try:
            entry = ActivityLog(
                action=action_value,
                description=description,
                details=details,
                project_id=project_id,
                card_id=card_id,
                user_id=user_id,
            )
            self.activity_repo.add(entry)
            await self.session.commit()

            logger.debug(
                "Activity recorded",
                action=action_value,
                project_id=str(project_id) if project_id else None,
                card_id=str(card_id) if card_id else None,
            )
            return entry

        except Exception as e:
            # Fire-and-forget: log the failure but don't propagate
            logger.warning("Failed to record activity", action=action_value, error=str(e))
            with contextlib.suppress(Exception):
                await self.session.rollback()
            return None

    async def list_for_project(
        self, project_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[ActivityLog], str | None, bool]:
        """Newest-first activity of a project.

        Raises:
            NotFoundError: If the project does not exist
        """
        if await self.project_repo.get_by_id(project_id) is None:
            raise NotFoundError("Project", project_id)
        return await self.activity_repo.list_by_project(project_id, cursor, limit)

    async def list_for_card(
        self, card_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[ActivityLog], str | None, bool]:
        """Newest-first activity of a card.

        Raises:
            NotFoundError: If the card does not exist
        """
        if await self.card_repo.get_by_id(card_id) is None:
            raise NotFoundError("Card", card_id)
        return await self.activity_repo.list_by_card(card_id, cursor, limit)
