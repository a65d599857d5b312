"""Column endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.kanban.api.dependencies import ColumnServiceDep
from src.kanban.schemas.column import ColumnCreate, ColumnRead, ColumnUpdate
from src.kanban.schemas.position import ColumnReorderRequest, ReorderResult

router = APIRouter(tags=["columns"])


@router.get(
    "/projects/{project_id}/columns",
    response_model=list[ColumnRead],
    summary="List columns",
    description="Columns of a project in display order.",
    responses={404: {"description": "Project not found"}},
)
async def list_columns(project_id: UUID, column_service: ColumnServiceDep) -> list[ColumnRead]:
    columns = await column_service.list_columns(project_id)
    return [ColumnRead.model_validate(c) for c in columns]


@router.post(
    "/projects/{project_id}/columns",
    response_model=ColumnRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create column",
    description="Append a column after the project's last one.",
    responses={
        201: {"description": "Column created"},
        404: {"description": "Project not found"},
    },
)
async def create_column(
    project_id: UUID,
    request: ColumnCreate,
    column_service: ColumnServiceDep,
) -> ColumnRead:
    column = await column_service.create_column(project_id, request)
    return ColumnRead.model_validate(column)


@router.post(
    "/projects/{project_id}/columns/reorder",
    response_model=ReorderResult,
    summary="Reorder columns",
    description=(
        "Assign new positions to columns in one transaction. "
        "Ids that do not belong to the project are ignored."
    ),
    responses={
        404: {"description": "Project not found"},
        500: {"description": "Reorder failed; no positions changed"},
    },
)
async def reorder_columns(
    project_id: UUID,
    request: ColumnReorderRequest,
    column_service: ColumnServiceDep,
) -> ReorderResult:
    updated = await column_service.reorder_columns(project_id, request.column_orders)
    return ReorderResult(updated=updated)


@router.patch(
    "/columns/{column_id}",
    response_model=ColumnRead,
    summary="Update column",
    responses={404: {"description": "Column not found"}},
)
async def update_column(
    column_id: UUID,
    request: ColumnUpdate,
    column_service: ColumnServiceDep,
) -> ColumnRead:
    column = await column_service.update_column(column_id, request)
    return ColumnRead.model_validate(column)


@router.delete(
    "/columns/{column_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete column",
    description="Delete a column and all of its cards.",
    responses={404: {"description": "Column not found"}},
)
async def delete_column(column_id: UUID, column_service: ColumnServiceDep) -> None:
    await column_service.delete_column(column_id)
