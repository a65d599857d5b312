"""Board events pushed to WebSocket subscribers.

Every event is `{"type": ..., "data": ...}` and the set of kinds is closed:
`BoardEvent` is a discriminated union on `type`, so handlers can match
exhaustively and payloads are always validated against their schema.
"""

from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter

from src.kanban.schemas.card import CardRead
from src.kanban.schemas.column import ColumnRead
from src.kanban.schemas.position import PositionUpdate
from src.kanban.schemas.project import ProjectRead


class CardsReordered(BaseModel):
    column_id: UUID
    card_orders: list[PositionUpdate]


class CardMoved(BaseModel):
    card_id: UUID
    from_column_id: UUID
    column_id: UUID
    position: int


class CardDeleted(BaseModel):
    id: UUID
    column_id: UUID


class ColumnDeleted(BaseModel):
    id: UUID
    project_id: UUID


class ProjectDeleted(BaseModel):
    id: UUID


class ProjectUpdatedEvent(BaseModel):
    type: Literal["project_updated"] = "project_updated"
    data: ProjectRead


class ProjectDeletedEvent(BaseModel):
    type: Literal["project_deleted"] = "project_deleted"
    data: ProjectDeleted


class ColumnCreatedEvent(BaseModel):
    type: Literal["column_created"] = "column_created"
    data: ColumnRead


class ColumnUpdatedEvent(BaseModel):
    type: Literal["column_updated"] = "column_updated"
    data: ColumnRead


class ColumnsReorderedEvent(BaseModel):
    type: Literal["columns_reordered"] = "columns_reordered"
    data: list[PositionUpdate]


class ColumnDeletedEvent(BaseModel):
    type: Literal["column_deleted"] = "column_deleted"
    data: ColumnDeleted


class CardCreatedEvent(BaseModel):
    type: Literal["card_created"] = "card_created"
    data: CardRead


class CardUpdatedEvent(BaseModel):
    type: Literal["card_updated"] = "card_updated"
    data: CardRead


class CardMovedEvent(BaseModel):
    type: Literal["card_moved"] = "card_moved"
    data: CardMoved


class CardsReorderedEvent(BaseModel):
    type: Literal["cards_reordered"] = "cards_reordered"
    data: CardsReordered


class CardDeletedEvent(BaseModel):
    type: Literal["card_deleted"] = "card_deleted"
    data: CardDeleted


BoardEvent = Annotated[
    ProjectUpdatedEvent
    | ProjectDeletedEvent
    | ColumnCreatedEvent
    | ColumnUpdatedEvent
    | ColumnsReorderedEvent
    | ColumnDeletedEvent
    | CardCreatedEvent
    | CardUpdatedEvent
    | CardMovedEvent
    | CardsReorderedEvent
    | CardDeletedEvent,
    Field(discriminator="type"),
]

board_event_adapter: TypeAdapter[BoardEvent] = TypeAdapter(BoardEvent)


def parse_event(raw: str | bytes) -> BoardEvent:
    """Parse a serialized event back into its typed model."""
    return board_event_adapter.validate_json(raw)
