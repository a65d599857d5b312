"""Activity log schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class ActivityLogRead(BaseModel):
    id: UUID
    action: str
    description: str
    details: dict[str, Any] | None
    card_id: UUID | None
    project_id: UUID | None
    user_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}
