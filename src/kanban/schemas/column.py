"""Column schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.kanban.schemas.common import HexColor, strip_required


class ColumnCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    color: HexColor = "#6B7280"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Column name")


class ColumnUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    color: HexColor | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_required(v, "Column name")


class ColumnRead(BaseModel):
    id: UUID
    name: str
    color: str
    position: int
    project_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
