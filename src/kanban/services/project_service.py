"""Project lifecycle: creation with the default board, updates and cascading deletes."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import NotFoundError
from src.kanban.core.logging import get_logger
from src.kanban.core.storage import AttachmentStorage
from src.kanban.models import ActivityAction, BoardColumn, Project
from src.kanban.models.base import utc_now
from src.kanban.realtime import BroadcastDispatcher
from src.kanban.repositories import CascadeRepository, ProjectRepository
from src.kanban.schemas.events import ProjectDeleted, ProjectDeletedEvent, ProjectUpdatedEvent
from src.kanban.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.kanban.services.activity_service import ActivityService
from src.kanban.services.base import BoardService, apply_changes

logger = get_logger(__name__)

# Seeded at positions 0..3 on every new project
DEFAULT_COLUMNS: tuple[tuple[str, str], ...] = (
    ("Backlog", "#6B7280"),
    ("Em Progresso", "#3B82F6"),
    ("Em Revisão", "#F59E0B"),
    ("Concluído", "#10B981"),
)


class ProjectService(BoardService):
    def __init__(
        self,
        project_repo: ProjectRepository,
        cascade_repo: CascadeRepository,
        session: AsyncSession,
        dispatcher: BroadcastDispatcher | None = None,
        activity: ActivityService | None = None,
        storage: AttachmentStorage | None = None,
    ):
        super().__init__(session, dispatcher)
        self.project_repo = project_repo
        self.cascade_repo = cascade_repo
        self.activity = activity
        self.storage = storage

    async def get_project(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    async def list_projects(
        self, owner_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[Project], str | None, bool]:
        return await self.project_repo.list_by_owner(owner_id, cursor, limit)

    async def create_project(self, data: ProjectCreate, owner_id: UUID) -> Project:
        """Create a project and seed its default columns in one transaction.

        Projects are not broadcast: nobody can be subscribed to a new id yet.
        """
        project = Project(**data.model_dump(), owner_id=owner_id)
        self.project_repo.add(project)
        for position, (name, color) in enumerate(DEFAULT_COLUMNS):
            self.session.add(
                BoardColumn(name=name, color=color, position=position, project_id=project.id)
            )
        await self._commit("create project")

        logger.info("Project created", project_id=str(project.id), owner_id=str(owner_id))
        if self.activity is not None:
            await self.activity.record(
                ActivityAction.PROJECT_CREATED,
                f'Project "{project.name}" was created',
                user_id=owner_id,
                project_id=project.id,
                details={"projectName": project.name},
            )
        return project

    async def update_project(self, project_id: UUID, data: ProjectUpdate) -> Project:
        project = await self.get_project(project_id)
        apply_changes(
            project,
            data.model_dump(exclude_unset=True),
            required={"name", "color", "icon", "progress"},
        )
        project.updated_at = utc_now()
        await self._commit("update project")

        await self._publish(
            project.id, ProjectUpdatedEvent(data=ProjectRead.model_validate(project))
        )
        return project

    async def delete_project(self, project_id: UUID) -> None:
        """Delete a project with its columns, cards, tags and entities."""
        await self.get_project(project_id)
        filenames = await self.cascade_repo.delete_project(project_id)
        await self._commit("delete project")

        logger.info("Project deleted", project_id=str(project_id), files=len(filenames))
        if self.storage is not None:
            await self.storage.remove(filenames)
        await self._publish(project_id, ProjectDeletedEvent(data=ProjectDeleted(id=project_id)))
