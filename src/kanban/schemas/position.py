"""Positional ordering payloads shared by column and card reorders."""

from uuid import UUID

from pydantic import BaseModel, Field


class PositionUpdate(BaseModel):
    """One `(id, position)` pair of a bulk reorder."""

    id: UUID
    position: int = Field(ge=0)


class ColumnReorderRequest(BaseModel):
    column_orders: list[PositionUpdate]


class CardReorderRequest(BaseModel):
    card_orders: list[PositionUpdate]


class CardMoveRequest(BaseModel):
    column_id: UUID
    position: int = Field(ge=0)


class ReorderResult(BaseModel):
    success: bool = True
    updated: int
