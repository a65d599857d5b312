"""Card endpoints, including moves and reorders."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.kanban.api.dependencies import (
    ActivityServiceDep,
    BoardViewServiceDep,
    CardServiceDep,
    CurrentUserId,
)
from src.kanban.core.config import get_settings
from src.kanban.schemas.activity import ActivityLogRead
from src.kanban.schemas.board import CardDetail
from src.kanban.schemas.card import CardCreate, CardRead, CardUpdate
from src.kanban.schemas.pagination import PaginatedResponse
from src.kanban.schemas.position import CardMoveRequest, CardReorderRequest, ReorderResult

router = APIRouter(tags=["cards"])


@router.post(
    "/columns/{column_id}/cards",
    response_model=CardRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create card",
    description="Append a card after the column's last one.",
    responses={
        201: {"description": "Card created"},
        404: {"description": "Column not found"},
    },
)
async def create_card(
    column_id: UUID,
    request: CardCreate,
    card_service: CardServiceDep,
    user_id: CurrentUserId,
) -> CardRead:
    card = await card_service.create_card(column_id, request, creator_id=user_id)
    return CardRead.model_validate(card)


@router.post(
    "/columns/{column_id}/cards/reorder",
    response_model=ReorderResult,
    summary="Reorder cards",
    description=(
        "Assign new positions to the cards of one column in one transaction. "
        "Ids that are not in the column are ignored."
    ),
    responses={
        404: {"description": "Column not found"},
        500: {"description": "Reorder failed; no positions changed"},
    },
)
async def reorder_cards(
    column_id: UUID,
    request: CardReorderRequest,
    card_service: CardServiceDep,
) -> ReorderResult:
    updated = await card_service.reorder_cards(column_id, request.card_orders)
    return ReorderResult(updated=updated)


@router.get(
    "/cards/{card_id}",
    response_model=CardDetail,
    summary="Get card",
    description="Card with its relations, comments and attachments.",
    responses={404: {"description": "Card not found"}},
)
async def get_card(card_id: UUID, view_service: BoardViewServiceDep) -> CardDetail:
    return await view_service.get_card_detail(card_id)


@router.patch(
    "/cards/{card_id}",
    response_model=CardRead,
    summary="Update card",
    responses={404: {"description": "Card not found"}},
)
async def update_card(
    card_id: UUID,
    request: CardUpdate,
    card_service: CardServiceDep,
    user_id: CurrentUserId,
) -> CardRead:
    card = await card_service.update_card(card_id, request, actor_id=user_id)
    return CardRead.model_validate(card)


@router.post(
    "/cards/{card_id}/move",
    response_model=CardRead,
    summary="Move card",
    description=(
        "Place a card at a position in any column of its project. "
        "Other cards keep their positions; clients settle a dense order with a reorder."
    ),
    responses={
        400: {"description": "Column belongs to another project"},
        404: {"description": "Card or column not found"},
    },
)
async def move_card(
    card_id: UUID,
    request: CardMoveRequest,
    card_service: CardServiceDep,
    user_id: CurrentUserId,
) -> CardRead:
    card = await card_service.move_card(
        card_id, request.column_id, request.position, actor_id=user_id
    )
    return CardRead.model_validate(card)


@router.delete(
    "/cards/{card_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete card",
    description="Delete a card with its links, checklist, comments and attachments.",
    responses={404: {"description": "Card not found"}},
)
async def delete_card(card_id: UUID, card_service: CardServiceDep) -> None:
    await card_service.delete_card(card_id)


@router.get(
    "/cards/{card_id}/activity",
    response_model=PaginatedResponse[ActivityLogRead],
    summary="Card activity",
    description="Activity log of a card, newest first.",
)
async def list_card_activity(
    card_id: UUID,
    activity_service: ActivityServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor for pagination")] = None,
    limit: Annotated[int | None, Query(ge=1, le=100, description="Max items to return")] = None,
) -> PaginatedResponse[ActivityLogRead]:
    entries, next_cursor, has_more = await activity_service.list_for_card(
        card_id, cursor, limit or get_settings().activity_page_size
    )
    return PaginatedResponse(
        items=[ActivityLogRead.model_validate(e) for e in entries],
        next_cursor=next_cursor,
        has_more=has_more,
    )
