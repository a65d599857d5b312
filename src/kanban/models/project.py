"""Project and column models - the board skeleton."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.kanban.models.base import utc_now


class Project(SQLModel, table=True):
    """Top-level workspace owning an ordered list of columns."""

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    description: str | None = Field(default=None)
    color: str = Field(default="#0066CC", max_length=7)
    icon: str = Field(default="project-diagram", max_length=50)
    progress: int = Field(default=0)
    deadline: datetime | None = Field(default=None)
    owner_id: UUID = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, index=True)


class BoardColumn(SQLModel, table=True):
    """Ordered lane within a project.

    `position` is unique within the project only after a reorder settles;
    readers must sort by it rather than rely on contiguity.
    """

    __tablename__ = "columns"
    __table_args__ = (Index("ix_columns_project_position", "project_id", "position"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    color: str = Field(default="#6B7280", max_length=7)
    position: int
    project_id: UUID = Field(foreign_key="projects.id", ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
