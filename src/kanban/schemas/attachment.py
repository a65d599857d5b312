"""Attachment schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.kanban.schemas.user import UserRead


class AttachmentRead(BaseModel):
    id: UUID
    filename: str
    original_name: str
    mime_type: str
    size: int
    url: str
    card_id: UUID
    uploaded_by_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class AttachmentWithUploader(AttachmentRead):
    uploaded_by: UserRead | None = None
