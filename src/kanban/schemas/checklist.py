"""Checklist item schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.kanban.schemas.common import strip_required


class ChecklistItemCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    completed: bool = False
    # Appended after the last item when omitted
    position: int | None = Field(default=None, ge=0)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return strip_required(v, "Checklist item title")


class ChecklistItemUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    completed: bool | None = None
    position: int | None = Field(default=None, ge=0)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return strip_required(v, "Checklist item title")


class ChecklistItemRead(BaseModel):
    id: UUID
    title: str
    completed: bool
    position: int
    card_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
