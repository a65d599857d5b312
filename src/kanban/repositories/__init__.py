"""Repository layer - data access abstraction.

Repositories never commit; services own the transaction boundary.
"""

from src.kanban.repositories.activity import ActivityLogRepository
from src.kanban.repositories.base import BaseRepository
from src.kanban.repositories.card import CardRepository
from src.kanban.repositories.card_content import (
    AttachmentRepository,
    ChecklistRepository,
    CommentRepository,
)
from src.kanban.repositories.cascade import CascadeRepository
from src.kanban.repositories.column import ColumnRepository
from src.kanban.repositories.label import EntityRepository, TagRepository
from src.kanban.repositories.position import PositionStore, next_position
from src.kanban.repositories.project import ProjectRepository
from src.kanban.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "PositionStore",
    "next_position",
    # Board
    "CardRepository",
    "CascadeRepository",
    "ColumnRepository",
    "ProjectRepository",
    # Card content
    "AttachmentRepository",
    "ChecklistRepository",
    "CommentRepository",
    "EntityRepository",
    "TagRepository",
    # Other
    "ActivityLogRepository",
    "UserRepository",
]
