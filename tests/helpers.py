"""Test doubles and helpers shared across test modules."""

import asyncio
import json
from dataclasses import dataclass
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import TransportError
from src.kanban.core.storage import AttachmentStorage
from src.kanban.realtime import BroadcastDispatcher
from src.kanban.repositories import (
    ActivityLogRepository,
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
from src.kanban.services import (
    ActivityService,
    BoardViewService,
    CardService,
    ColumnService,
    LabelService,
    ProjectService,
)


class FakeSubscriber:
    """Stands in for a WebSocket subscriber; records what it is sent."""

    def __init__(
        self,
        project_id: UUID | None,
        is_open: bool = True,
        fail: bool = False,
        delay: float = 0,
    ):
        self.project_id = project_id
        self.connection_id = uuid4().hex[:12]
        self.is_open = is_open
        self.fail = fail
        self.delay = delay
        self.sent: list[str] = []
        self.closed_with: int | None = None

    async def send_text(self, message: str) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise TransportError("connection reset")
        self.sent.append(message)

    async def close(self, code: int = 1000) -> None:
        self.closed_with = code
        self.is_open = False

    @property
    def messages(self) -> list[dict[str, Any]]:
        return [json.loads(m) for m in self.sent]


@dataclass
class Board:
    """Services wired around one session, as the request dependencies do."""

    projects: ProjectService
    columns: ColumnService
    cards: CardService
    labels: LabelService
    view: BoardViewService


def build_board(
    session: AsyncSession,
    dispatcher: BroadcastDispatcher | None = None,
    storage: AttachmentStorage | None = None,
) -> Board:
    project_repo = ProjectRepository(session)
    column_repo = ColumnRepository(session)
    card_repo = CardRepository(session)
    cascade_repo = CascadeRepository(session)
    user_repo = UserRepository(session)
    activity = ActivityService(
        ActivityLogRepository(session), project_repo, card_repo, session
    )
    return Board(
        projects=ProjectService(
            project_repo,
            cascade_repo,
            session,
            dispatcher=dispatcher,
            activity=activity,
            storage=storage,
        ),
        columns=ColumnService(
            column_repo, project_repo, cascade_repo, session, dispatcher=dispatcher, storage=storage
        ),
        cards=CardService(
            card_repo,
            column_repo,
            cascade_repo,
            user_repo,
            session,
            dispatcher=dispatcher,
            activity=activity,
            storage=storage,
        ),
        labels=LabelService(
            TagRepository(session), EntityRepository(session), project_repo, card_repo, session
        ),
        view=BoardViewService(
            project_repo,
            column_repo,
            card_repo,
            TagRepository(session),
            EntityRepository(session),
            ChecklistRepository(session),
            CommentRepository(session),
            AttachmentRepository(session),
            user_repo,
        ),
    )
