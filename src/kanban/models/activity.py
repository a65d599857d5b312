"""Append-only activity log."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Index
from sqlmodel import Field, SQLModel

from src.kanban.models.base import JSONType, utc_now


class ActivityLog(SQLModel, table=True):
    """Audit record written after board mutations. Never updated."""

    __tablename__ = "activity_log"
    __table_args__ = (
        Index("ix_activity_log_project_created", "project_id", "created_at"),
        Index("ix_activity_log_card_created", "card_id", "created_at"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    action: str = Field(max_length=100)  # ActivityAction value
    description: str
    # "metadata" is reserved on declarative classes
    details: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column("metadata", JSONType, nullable=True),
    )
    card_id: UUID | None = Field(default=None, foreign_key="cards.id", ondelete="CASCADE")
    project_id: UUID | None = Field(default=None, foreign_key="projects.id", ondelete="CASCADE")
    user_id: UUID = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
