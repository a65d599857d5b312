"""Model exports.

Import from here: `from src.kanban.models import Project, Card`
"""

from src.kanban.models.activity import ActivityLog
from src.kanban.models.card import Attachment, Card, ChecklistItem, Comment
from src.kanban.models.enums import ActivityAction, EntityType, Priority
from src.kanban.models.label import CardEntity, CardTag, Entity, Tag
from src.kanban.models.project import BoardColumn, Project
from src.kanban.models.user import User

__all__ = [
    # Enums
    "ActivityAction",
    "EntityType",
    "Priority",
    # Models
    "ActivityLog",
    "Attachment",
    "BoardColumn",
    "Card",
    "CardEntity",
    "CardTag",
    "ChecklistItem",
    "Comment",
    "Entity",
    "Project",
    "Tag",
    "User",
]
