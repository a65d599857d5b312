"""Denormalized read models for board hydration and the card detail view."""

from pydantic import BaseModel, Field

from src.kanban.schemas.attachment import AttachmentWithUploader
from src.kanban.schemas.card import CardRead
from src.kanban.schemas.checklist import ChecklistItemRead
from src.kanban.schemas.column import ColumnRead
from src.kanban.schemas.comment import CommentWithAuthor
from src.kanban.schemas.label import CardEntityRead, CardTagRead, EntityRead, TagRead
from src.kanban.schemas.project import ProjectRead
from src.kanban.schemas.user import UserRead


class CardCounts(BaseModel):
    comments: int = 0
    attachments: int = 0
    checklist_items: int = 0
    completed_checklist_items: int = 0


class CardSummary(CardRead):
    """Card as it appears on the board: relations inlined, heavy lists counted."""

    assignee: UserRead | None = None
    created_by: UserRead | None = None
    tags: list[CardTagRead] = []
    entities: list[CardEntityRead] = []
    checklist_items: list[ChecklistItemRead] = []
    counts: CardCounts = Field(default_factory=CardCounts)


class CardDetail(CardSummary):
    """Single-card view with full comment and attachment lists, newest first."""

    comments: list[CommentWithAuthor] = []
    attachments: list[AttachmentWithUploader] = []


class ColumnView(ColumnRead):
    cards: list[CardSummary] = []


class ProjectCounts(BaseModel):
    cards: int = 0
    completed_cards: int = 0


class ProjectView(ProjectRead):
    owner: UserRead | None = None
    columns: list[ColumnView] = []
    tags: list[TagRead] = []
    entities: list[EntityRead] = []
    counts: ProjectCounts = Field(default_factory=ProjectCounts)
