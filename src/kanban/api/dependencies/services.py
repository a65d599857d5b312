"""Service factory dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends

from src.kanban.api.dependencies.db import DBSession
from src.kanban.api.dependencies.realtime import Dispatcher
from src.kanban.api.dependencies.repositories import (
    AttachmentRepo,
    CardRepo,
    CascadeRepo,
    ChecklistRepo,
    ColumnRepo,
    CommentRepo,
    EntityRepo,
    ProjectRepo,
    TagRepo,
    UserRepo,
)
from src.kanban.core.config import get_settings
from src.kanban.core.db import get_session
from src.kanban.core.storage import AttachmentStorage
from src.kanban.repositories import ActivityLogRepository, CardRepository, ProjectRepository
from src.kanban.services import (
    ActivityService,
    AttachmentService,
    BoardViewService,
    CardService,
    ChecklistService,
    ColumnService,
    CommentService,
    LabelService,
    ProjectService,
    UserService,
)


def get_attachment_storage() -> AttachmentStorage:
    return AttachmentStorage.from_settings(get_settings())


Storage = Annotated[AttachmentStorage, Depends(get_attachment_storage)]


async def get_activity_service() -> AsyncGenerator[ActivityService]:
    """Get activity service with an isolated database session.

    Uses a dedicated session that commits independently from the mutation's
    transaction, so a failed activity write never touches board state.
    """
    async with get_session() as session:
        yield ActivityService(
            ActivityLogRepository(session),
            ProjectRepository(session),
            CardRepository(session),
            session,
        )


ActivityServiceDep = Annotated[ActivityService, Depends(get_activity_service)]


def get_user_service(user_repo: UserRepo, session: DBSession) -> UserService:
    return UserService(user_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    cascade_repo: CascadeRepo,
    session: DBSession,
    dispatcher: Dispatcher,
    activity: ActivityServiceDep,
    storage: Storage,
) -> ProjectService:
    return ProjectService(project_repo, cascade_repo, session, dispatcher, activity, storage)


def get_column_service(
    column_repo: ColumnRepo,
    project_repo: ProjectRepo,
    cascade_repo: CascadeRepo,
    session: DBSession,
    dispatcher: Dispatcher,
    storage: Storage,
) -> ColumnService:
    return ColumnService(column_repo, project_repo, cascade_repo, session, dispatcher, storage)


def get_card_service(
    card_repo: CardRepo,
    column_repo: ColumnRepo,
    cascade_repo: CascadeRepo,
    user_repo: UserRepo,
    session: DBSession,
    dispatcher: Dispatcher,
    activity: ActivityServiceDep,
    storage: Storage,
) -> CardService:
    return CardService(
        card_repo,
        column_repo,
        cascade_repo,
        user_repo,
        session,
        dispatcher,
        activity,
        storage,
    )


def get_label_service(
    tag_repo: TagRepo,
    entity_repo: EntityRepo,
    project_repo: ProjectRepo,
    card_repo: CardRepo,
    session: DBSession,
) -> LabelService:
    return LabelService(tag_repo, entity_repo, project_repo, card_repo, session)


def get_checklist_service(
    checklist_repo: ChecklistRepo, card_repo: CardRepo, session: DBSession
) -> ChecklistService:
    return ChecklistService(checklist_repo, card_repo, session)


def get_comment_service(
    comment_repo: CommentRepo,
    card_repo: CardRepo,
    session: DBSession,
    activity: ActivityServiceDep,
) -> CommentService:
    return CommentService(comment_repo, card_repo, session, activity)


def get_attachment_service(
    attachment_repo: AttachmentRepo,
    card_repo: CardRepo,
    storage: Storage,
    session: DBSession,
    activity: ActivityServiceDep,
) -> AttachmentService:
    return AttachmentService(attachment_repo, card_repo, storage, session, activity)


def get_board_view_service(
    project_repo: ProjectRepo,
    column_repo: ColumnRepo,
    card_repo: CardRepo,
    tag_repo: TagRepo,
    entity_repo: EntityRepo,
    checklist_repo: ChecklistRepo,
    comment_repo: CommentRepo,
    attachment_repo: AttachmentRepo,
    user_repo: UserRepo,
) -> BoardViewService:
    return BoardViewService(
        project_repo,
        column_repo,
        card_repo,
        tag_repo,
        entity_repo,
        checklist_repo,
        comment_repo,
        attachment_repo,
        user_repo,
    )


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ColumnServiceDep = Annotated[ColumnService, Depends(get_column_service)]
CardServiceDep = Annotated[CardService, Depends(get_card_service)]
LabelServiceDep = Annotated[LabelService, Depends(get_label_service)]
ChecklistServiceDep = Annotated[ChecklistService, Depends(get_checklist_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
AttachmentServiceDep = Annotated[AttachmentService, Depends(get_attachment_service)]
BoardViewServiceDep = Annotated[BoardViewService, Depends(get_board_view_service)]
