"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.kanban.api.dependencies.db import DBSession
from src.kanban.repositories import (
    AttachmentRepository,
    CardRepository,
    CascadeRepository,
    ChecklistRepository,
    ColumnRepository,
    CommentRepository,
    EntityRepository,
    ProjectRepository,
    TagRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_column_repository(session: DBSession) -> ColumnRepository:
    return ColumnRepository(session)


def get_card_repository(session: DBSession) -> CardRepository:
    return CardRepository(session)


def get_cascade_repository(session: DBSession) -> CascadeRepository:
    return CascadeRepository(session)


def get_tag_repository(session: DBSession) -> TagRepository:
    return TagRepository(session)


def get_entity_repository(session: DBSession) -> EntityRepository:
    return EntityRepository(session)


def get_checklist_repository(session: DBSession) -> ChecklistRepository:
    return ChecklistRepository(session)


def get_comment_repository(session: DBSession) -> CommentRepository:
    return CommentRepository(session)


def get_attachment_repository(session: DBSession) -> AttachmentRepository:
    return AttachmentRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
ColumnRepo = Annotated[ColumnRepository, Depends(get_column_repository)]
CardRepo = Annotated[CardRepository, Depends(get_card_repository)]
CascadeRepo = Annotated[CascadeRepository, Depends(get_cascade_repository)]
TagRepo = Annotated[TagRepository, Depends(get_tag_repository)]
EntityRepo = Annotated[EntityRepository, Depends(get_entity_repository)]
ChecklistRepo = Annotated[ChecklistRepository, Depends(get_checklist_repository)]
CommentRepo = Annotated[CommentRepository, Depends(get_comment_repository)]
AttachmentRepo = Annotated[AttachmentRepository, Depends(get_attachment_repository)]
