"""Column operations: append, edit, reorder, delete."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import NotFoundError
from src.kanban.core.logging import get_logger
from src.kanban.core.storage import AttachmentStorage
from src.kanban.models import BoardColumn
from src.kanban.models.base import utc_now
from src.kanban.realtime import BroadcastDispatcher
from src.kanban.repositories import (
    CascadeRepository,
    ColumnRepository,
    PositionStore,
    ProjectRepository,
)
from src.kanban.schemas.column import ColumnCreate, ColumnRead, ColumnUpdate
from src.kanban.schemas.events import (
    ColumnCreatedEvent,
    ColumnDeleted,
    ColumnDeletedEvent,
    ColumnsReorderedEvent,
    ColumnUpdatedEvent,
)
from src.kanban.schemas.position import PositionUpdate
from src.kanban.services.base import BoardService, apply_changes

logger = get_logger(__name__)


class ColumnService(BoardService):
    def __init__(
        self,
        column_repo: ColumnRepository,
        project_repo: ProjectRepository,
        cascade_repo: CascadeRepository,
        session: AsyncSession,
        dispatcher: BroadcastDispatcher | None = None,
        storage: AttachmentStorage | None = None,
    ):
        super().__init__(session, dispatcher)
        self.column_repo = column_repo
        self.project_repo = project_repo
        self.cascade_repo = cascade_repo
        self.positions = PositionStore(session, BoardColumn, "project_id")
        self.storage = storage

    async def get_column(self, column_id: UUID) -> BoardColumn:
        column = await self.column_repo.get_by_id(column_id)
        if column is None:
            raise NotFoundError("Column", column_id)
        return column

    async def _require_project(self, project_id: UUID) -> None:
        if await self.project_repo.get_by_id(project_id) is None:
            raise NotFoundError("Project", project_id)

    async def list_columns(self, project_id: UUID) -> list[BoardColumn]:
        await self._require_project(project_id)
        return await self.column_repo.list_by_project(project_id)

    async def create_column(self, project_id: UUID, data: ColumnCreate) -> BoardColumn:
        """Append a column after the project's last one."""
        await self._require_project(project_id)
        column = BoardColumn(
            **data.model_dump(),
            project_id=project_id,
            position=await self.positions.next_position(project_id),
        )
        self.column_repo.add(column)
        await self._commit("create column")

        logger.info("Column created", column_id=str(column.id), position=column.position)
        await self._publish(project_id, ColumnCreatedEvent(data=ColumnRead.model_validate(column)))
        return column

    async def update_column(self, column_id: UUID, data: ColumnUpdate) -> BoardColumn:
        column = await self.get_column(column_id)
        apply_changes(column, data.model_dump(exclude_unset=True), required={"name", "color"})
        column.updated_at = utc_now()
        await self._commit("update column")

        await self._publish(
            column.project_id, ColumnUpdatedEvent(data=ColumnRead.model_validate(column))
        )
        return column

    async def reorder_columns(self, project_id: UUID, orders: list[PositionUpdate]) -> int:
        """Reassign column positions atomically. Ids outside the project are ignored."""
        await self._require_project(project_id)
        updated = await self.positions.reorder(project_id, orders)

        await self._publish(project_id, ColumnsReorderedEvent(data=orders))
        return updated

    async def delete_column(self, column_id: UUID) -> None:
        """Delete a column and its cards. Remaining columns keep their positions."""
        column = await self.get_column(column_id)
        project_id = column.project_id
        filenames = await self.cascade_repo.delete_columns([column_id])
        await self._commit("delete column")

        logger.info("Column deleted", column_id=str(column_id), files=len(filenames))
        if self.storage is not None:
            await self.storage.remove(filenames)
        await self._publish(
            project_id, ColumnDeletedEvent(data=ColumnDeleted(id=column_id, project_id=project_id))
        )
