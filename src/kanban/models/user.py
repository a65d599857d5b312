from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.kanban.models.base import utc_now


class User(SQLModel, table=True):
    """Board user - owner, assignee, card creator, comment author."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str | None = Field(default=None, max_length=255, unique=True, index=True)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    profile_image_url: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
