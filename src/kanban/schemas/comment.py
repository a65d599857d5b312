"""Comment schemas. Comments are immutable, so there is no update schema."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.kanban.schemas.common import strip_required
from src.kanban.schemas.user import UserRead


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=10_000)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return strip_required(v, "Comment")


class CommentRead(BaseModel):
    id: UUID
    content: str
    card_id: UUID
    author_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class CommentWithAuthor(CommentRead):
    author: UserRead | None = None
