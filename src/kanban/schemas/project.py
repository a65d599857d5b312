"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.kanban.schemas.common import HexColor, strip_optional, strip_required, to_naive_utc


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    color: HexColor = "#0066CC"
    icon: str = Field(default="project-diagram", min_length=1, max_length=50)
    progress: int = Field(default=0, ge=0, le=100)
    deadline: datetime | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Project name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("deadline")
    @classmethod
    def validate_deadline(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Only fields that are sent are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    color: HexColor | None = None
    icon: str | None = Field(default=None, min_length=1, max_length=50)
    progress: int | None = Field(default=None, ge=0, le=100)
    deadline: datetime | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_required(v, "Project name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("deadline")
    @classmethod
    def validate_deadline(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    name: str
    description: str | None
    color: str
    icon: str
    progress: int
    deadline: datetime | None
    owner_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
