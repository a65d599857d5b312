"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenient imports.
"""

from src.kanban.api.dependencies.db import DBSession, get_db_session
from src.kanban.api.dependencies.realtime import (
    Dispatcher,
    Registry,
    get_dispatcher,
    get_registry,
)
from src.kanban.api.dependencies.services import (
    ActivityServiceDep,
    AttachmentServiceDep,
    BoardViewServiceDep,
    CardServiceDep,
    ChecklistServiceDep,
    ColumnServiceDep,
    CommentServiceDep,
    LabelServiceDep,
    ProjectServiceDep,
    Storage,
    UserServiceDep,
    get_activity_service,
    get_attachment_storage,
)
from src.kanban.api.dependencies.user import CurrentUserId, get_current_user_id

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Realtime
    "Dispatcher",
    "Registry",
    "get_dispatcher",
    "get_registry",
    # User
    "CurrentUserId",
    "get_current_user_id",
    # Services
    "ActivityServiceDep",
    "AttachmentServiceDep",
    "BoardViewServiceDep",
    "CardServiceDep",
    "ChecklistServiceDep",
    "ColumnServiceDep",
    "CommentServiceDep",
    "LabelServiceDep",
    "ProjectServiceDep",
    "Storage",
    "UserServiceDep",
    "get_activity_service",
    "get_attachment_storage",
]
