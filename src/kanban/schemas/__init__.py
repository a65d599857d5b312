from src.kanban.schemas.activity import ActivityLogRead
from src.kanban.schemas.attachment import AttachmentRead, AttachmentWithUploader
from src.kanban.schemas.board import (
    CardCounts,
    CardDetail,
    CardSummary,
    ColumnView,
    ProjectCounts,
    ProjectView,
)
from src.kanban.schemas.card import CardCreate, CardRead, CardUpdate
from src.kanban.schemas.checklist import (
    ChecklistItemCreate,
    ChecklistItemRead,
    ChecklistItemUpdate,
)
from src.kanban.schemas.column import ColumnCreate, ColumnRead, ColumnUpdate
from src.kanban.schemas.comment import CommentCreate, CommentRead, CommentWithAuthor
from src.kanban.schemas.label import (
    CardEntityRead,
    CardTagRead,
    EntityCreate,
    EntityRead,
    EntityUpdate,
    TagCreate,
    TagRead,
    TagUpdate,
)
from src.kanban.schemas.position import (
    CardMoveRequest,
    CardReorderRequest,
    ColumnReorderRequest,
    PositionUpdate,
    ReorderResult,
)
from src.kanban.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from src.kanban.schemas.user import UserCreate, UserRead

__all__ = [
    # Activity
    "ActivityLogRead",
    # Attachment
    "AttachmentRead",
    "AttachmentWithUploader",
    # Board views
    "CardCounts",
    "CardDetail",
    "CardSummary",
    "ColumnView",
    "ProjectCounts",
    "ProjectView",
    # Card
    "CardCreate",
    "CardRead",
    "CardUpdate",
    # Checklist
    "ChecklistItemCreate",
    "ChecklistItemRead",
    "ChecklistItemUpdate",
    # Column
    "ColumnCreate",
    "ColumnRead",
    "ColumnUpdate",
    # Comment
    "CommentCreate",
    "CommentRead",
    "CommentWithAuthor",
    # Labels
    "CardEntityRead",
    "CardTagRead",
    "EntityCreate",
    "EntityRead",
    "EntityUpdate",
    "TagCreate",
    "TagRead",
    "TagUpdate",
    # Positions
    "CardMoveRequest",
    "CardReorderRequest",
    "ColumnReorderRequest",
    "PositionUpdate",
    "ReorderResult",
    # Project
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    # User
    "UserCreate",
    "UserRead",
]
