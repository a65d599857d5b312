"""Card schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.kanban.models.enums import Priority
from src.kanban.schemas.common import strip_optional, strip_required, to_naive_utc


class CardCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    priority: Priority = Priority.MEDIUM
    deadline: datetime | None = None
    assignee_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return strip_required(v, "Card title")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("deadline")
    @classmethod
    def validate_deadline(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class CardUpdate(BaseModel):
    """Field edits. Column membership and position change only through a move."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    priority: Priority | None = None
    deadline: datetime | None = None
    completed: bool | None = None
    assignee_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return strip_required(v, "Card title")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("deadline")
    @classmethod
    def validate_deadline(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class CardRead(BaseModel):
    id: UUID
    title: str
    description: str | None
    priority: Priority
    position: int
    deadline: datetime | None
    completed: bool
    column_id: UUID
    assignee_id: UUID | None
    created_by_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
