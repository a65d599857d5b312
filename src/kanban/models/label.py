"""Project-scoped labels: tags and domain entities, plus their card links."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.kanban.models.base import JSONType, utc_now


class Tag(SQLModel, table=True):
    __tablename__ = "tags"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    color: str = Field(max_length=7)
    project_id: UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=utc_now)


class CardTag(SQLModel, table=True):
    __tablename__ = "card_tags"
    __table_args__ = (UniqueConstraint("card_id", "tag_id", name="uq_card_tags_card_tag"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    card_id: UUID = Field(foreign_key="cards.id", ondelete="CASCADE", index=True)
    tag_id: UUID = Field(foreign_key="tags.id", ondelete="CASCADE", index=True)


class Entity(SQLModel, table=True):
    """Cross-reference to a property, person or contract.

    `data` is an opaque JSON payload whose shape depends on `type`.
    """

    __tablename__ = "entities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    type: str = Field(max_length=20)  # EntityType value
    data: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSONType, nullable=True),
    )
    project_id: UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class CardEntity(SQLModel, table=True):
    __tablename__ = "card_entities"
    __table_args__ = (
        UniqueConstraint("card_id", "entity_id", name="uq_card_entities_card_entity"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    card_id: UUID = Field(foreign_key="cards.id", ondelete="CASCADE", index=True)
    entity_id: UUID = Field(foreign_key="entities.id", ondelete="CASCADE", index=True)
