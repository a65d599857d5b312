"""Project endpoints: lifecycle, board hydration and activity."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.kanban.api.dependencies import (
    ActivityServiceDep,
    BoardViewServiceDep,
    CurrentUserId,
    ProjectServiceDep,
)
from src.kanban.core.config import get_settings
from src.kanban.schemas.activity import ActivityLogRead
from src.kanban.schemas.board import ProjectView
from src.kanban.schemas.pagination import PaginatedResponse
from src.kanban.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List projects",
    description="List the acting user's projects, most recently updated first.",
)
async def list_projects(
    project_service: ProjectServiceDep,
    user_id: CurrentUserId,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int, Query(ge=1, le=100, description="Max items to return")] = 50,
) -> PaginatedResponse[ProjectRead]:
    projects, next_cursor, has_more = await project_service.list_projects(user_id, cursor, limit)
    return PaginatedResponse(
        items=[ProjectRead.model_validate(p) for p in projects],
        next_cursor=next_cursor,
        has_more=has_more,
    )


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Create a project seeded with the four default columns.",
    responses={
        201: {"description": "Project created"},
        400: {"description": "Invalid input"},
    },
)
async def create_project(
    request: ProjectCreate,
    project_service: ProjectServiceDep,
    user_id: CurrentUserId,
) -> ProjectRead:
    project = await project_service.create_project(request, owner_id=user_id)
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectView,
    summary="Get project board",
    description="Full board state for client hydration: columns, cards and their relations.",
    responses={
        200: {"description": "Project board"},
        404: {"description": "Project not found"},
    },
)
async def get_project(project_id: UUID, view_service: BoardViewServiceDep) -> ProjectView:
    return await view_service.get_project_view(project_id)


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    responses={
        200: {"description": "Project updated"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    project_service: ProjectServiceDep,
) -> ProjectRead:
    project = await project_service.update_project(project_id, request)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Delete a project with all of its columns, cards, tags and entities.",
    responses={
        204: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(project_id: UUID, project_service: ProjectServiceDep) -> None:
    await project_service.delete_project(project_id)


@router.get(
    "/{project_id}/activity",
    response_model=PaginatedResponse[ActivityLogRead],
    summary="Project activity",
    description="Activity log of a project, newest first.",
)
async def list_project_activity(
    project_id: UUID,
    activity_service: ActivityServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int | None, Query(ge=1, le=100, description="Max items to return")] = None,
) -> PaginatedResponse[ActivityLogRead]:
    entries, next_cursor, has_more = await activity_service.list_for_project(
        project_id, cursor, limit or get_settings().activity_page_size
    )
    return PaginatedResponse(
        items=[ActivityLogRead.model_validate(e) for e in entries],
        next_cursor=next_cursor,
        has_more=has_more,
    )
