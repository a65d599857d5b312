from src.kanban.services.activity_service import ActivityService
from src.kanban.services.attachment_service import AttachmentService
from src.kanban.services.board_view_service import BoardViewService
from src.kanban.services.card_service import CardService
from src.kanban.services.checklist_service import ChecklistService
from src.kanban.services.column_service import ColumnService
from src.kanban.services.comment_service import CommentService
from src.kanban.services.label_service import LabelService
from src.kanban.services.project_service import ProjectService
from src.kanban.services.user_service import UserService

__all__ = [
    "ActivityService",
    "AttachmentService",
    "BoardViewService",
    "CardService",
    "ChecklistService",
    "ColumnService",
    "CommentService",
    "LabelService",
    "ProjectService",
    "UserService",
]
