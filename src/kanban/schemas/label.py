"""Tag and entity schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.kanban.models.enums import EntityType
from src.kanban.schemas.common import HexColor, strip_required


class TagCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    color: HexColor

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Tag name")


class TagUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    color: HexColor | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_required(v, "Tag name")


class TagRead(BaseModel):
    id: UUID
    name: str
    color: str
    project_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class EntityCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    type: EntityType
    data: dict[str, Any] | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Entity name")


class EntityUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    type: EntityType | None = None
    data: dict[str, Any] | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return strip_required(v, "Entity name")


class EntityRead(BaseModel):
    id: UUID
    name: str
    type: EntityType
    data: dict[str, Any] | None
    project_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CardTagRead(BaseModel):
    """Card-tag link with the tag inlined."""

    id: UUID
    card_id: UUID
    tag_id: UUID
    tag: TagRead


class CardEntityRead(BaseModel):
    """Card-entity link with the entity inlined."""

    id: UUID
    card_id: UUID
    entity_id: UUID
    entity: EntityRead
