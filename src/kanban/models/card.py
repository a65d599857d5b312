"""Card model and the records owned by a card."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.kanban.models.base import utc_now
from src.kanban.models.enums import Priority


class Card(SQLModel, table=True):
    """Unit of work. Its state is positional: which column, which position."""

    __tablename__ = "cards"
    __table_args__ = (Index("ix_cards_column_position", "column_id", "position"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=255)
    description: str | None = Field(default=None)
    priority: str = Field(default=Priority.MEDIUM.value, max_length=10)
    position: int
    deadline: datetime | None = Field(default=None)
    completed: bool = Field(default=False)
    column_id: UUID = Field(foreign_key="columns.id", ondelete="CASCADE")
    assignee_id: UUID | None = Field(default=None, foreign_key="users.id")
    created_by_id: UUID = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ChecklistItem(SQLModel, table=True):
    __tablename__ = "checklist_items"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=255)
    completed: bool = Field(default=False)
    position: int
    card_id: UUID = Field(foreign_key="cards.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Comment(SQLModel, table=True):
    """Immutable once created."""

    __tablename__ = "comments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    content: str
    card_id: UUID = Field(foreign_key="cards.id", ondelete="CASCADE", index=True)
    author_id: UUID = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Attachment(SQLModel, table=True):
    """Metadata for a file stored on the server's upload directory."""

    __tablename__ = "attachments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    filename: str = Field(max_length=255)
    original_name: str = Field(max_length=255)
    mime_type: str = Field(max_length=100)
    size: int
    url: str = Field(max_length=500)
    card_id: UUID = Field(foreign_key="cards.id", ondelete="CASCADE", index=True)
    uploaded_by_id: UUID = Field(foreign_key="users.id")
    created_at: datetime = Field(default_factory=utc_now)
