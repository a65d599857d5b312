"""Read Aggregator - denormalized project and card views for client hydration.

Each view is assembled from a fixed number of batched queries (one per
relation), independent of how many cards the board holds.
"""

from collections import defaultdict
from collections.abc import Sequence
from uuid import UUID

from src.kanban.core.exceptions import NotFoundError
from src.kanban.models import Card, User
from src.kanban.repositories import (
    AttachmentRepository,
    CardRepository,
    ChecklistRepository,
    ColumnRepository,
    CommentRepository,
    EntityRepository,
    ProjectRepository,
    TagRepository,
    UserRepository,
)
from src.kanban.schemas.attachment import AttachmentRead, AttachmentWithUploader
from src.kanban.schemas.board import (
    CardCounts,
    CardDetail,
    CardSummary,
    ColumnView,
    ProjectCounts,
    ProjectView,
)
from src.kanban.schemas.card import CardRead
from src.kanban.schemas.checklist import ChecklistItemRead
from src.kanban.schemas.column import ColumnRead
from src.kanban.schemas.comment import CommentRead, CommentWithAuthor
from src.kanban.schemas.label import (
    CardEntityRead,
    CardTagRead,
    EntityRead,
    TagRead,
)
from src.kanban.schemas.project import ProjectRead
from src.kanban.schemas.user import UserRead


def _user(users: dict[UUID, User], user_id: UUID | None) -> UserRead | None:
    if user_id is None or user_id not in users:
        return None
    return UserRead.model_validate(users[user_id])


def _card_user_ids(cards: Sequence[Card]) -> list[UUID]:
    ids = [c.created_by_id for c in cards]
    ids.extend(c.assignee_id for c in cards if c.assignee_id is not None)
    return ids


class BoardViewService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        column_repo: ColumnRepository,
        card_repo: CardRepository,
        tag_repo: TagRepository,
        entity_repo: EntityRepository,
        checklist_repo: ChecklistRepository,
        comment_repo: CommentRepository,
        attachment_repo: AttachmentRepository,
        user_repo: UserRepository,
    ):
        self.project_repo = project_repo
        self.column_repo = column_repo
        self.card_repo = card_repo
        self.tag_repo = tag_repo
        self.entity_repo = entity_repo
        self.checklist_repo = checklist_repo
        self.comment_repo = comment_repo
        self.attachment_repo = attachment_repo
        self.user_repo = user_repo

    async def get_project_view(self, project_id: UUID) -> ProjectView:
        """Project with owner, ordered columns and cards, tags, entities and totals.

        Raises:
            NotFoundError: If the project does not exist
        """
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)

        columns = await self.column_repo.list_by_project(project_id)
        cards = await self.card_repo.list_by_columns([c.id for c in columns])
        users = await self.user_repo.get_many([project.owner_id, *_card_user_ids(cards)])
        summaries = await self._summaries(cards, users)

        by_column: dict[UUID, list[CardSummary]] = defaultdict(list)
        for summary in summaries:
            by_column[summary.column_id].append(summary)

        return ProjectView(
            **ProjectRead.model_validate(project).model_dump(),
            owner=_user(users, project.owner_id),
            columns=[
                ColumnView(**ColumnRead.model_validate(c).model_dump(), cards=by_column[c.id])
                for c in columns
            ],
            tags=[TagRead.model_validate(t) for t in await self.tag_repo.list_by_project(project_id)],
            entities=[
                EntityRead.model_validate(e)
                for e in await self.entity_repo.list_by_project(project_id)
            ],
            counts=ProjectCounts(
                cards=len(cards),
                completed_cards=sum(1 for c in cards if c.completed),
            ),
        )

    async def get_card_detail(self, card_id: UUID) -> CardDetail:
        """One card with its relations plus comments and attachments, newest first.

        Raises:
            NotFoundError: If the card does not exist
        """
        card = await self.card_repo.get_by_id(card_id)
        if card is None:
            raise NotFoundError("Card", card_id)

        comments = await self.comment_repo.list_by_card(card_id)
        attachments = await self.attachment_repo.list_by_card(card_id)
        author_ids = [c.author_id for c in comments] + [a.uploaded_by_id for a in attachments]
        users = await self.user_repo.get_many([*author_ids, *_card_user_ids([card])])
        (summary,) = await self._summaries([card], users)

        return CardDetail(
            **summary.model_dump(),
            comments=[
                CommentWithAuthor(
                    **CommentRead.model_validate(c).model_dump(),
                    author=_user(users, c.author_id),
                )
                for c in comments
            ],
            attachments=[
                AttachmentWithUploader(
                    **AttachmentRead.model_validate(a).model_dump(),
                    uploaded_by=_user(users, a.uploaded_by_id),
                )
                for a in attachments
            ],
        )

    async def _summaries(
        self, cards: Sequence[Card], users: dict[UUID, User]
    ) -> list[CardSummary]:
        """Inline relations for a batch of cards, preserving their order.

        `users` must already hold every creator and assignee of `cards`.
        """
        if not cards:
            return []
        card_ids = [c.id for c in cards]

        tags: dict[UUID, list[CardTagRead]] = defaultdict(list)
        for link, tag in await self.tag_repo.links_for_cards(card_ids):
            tags[link.card_id].append(
                CardTagRead(
                    id=link.id,
                    card_id=link.card_id,
                    tag_id=link.tag_id,
                    tag=TagRead.model_validate(tag),
                )
            )

        entities: dict[UUID, list[CardEntityRead]] = defaultdict(list)
        for link, entity in await self.entity_repo.links_for_cards(card_ids):
            entities[link.card_id].append(
                CardEntityRead(
                    id=link.id,
                    card_id=link.card_id,
                    entity_id=link.entity_id,
                    entity=EntityRead.model_validate(entity),
                )
            )

        checklist: dict[UUID, list[ChecklistItemRead]] = defaultdict(list)
        for item in await self.checklist_repo.list_for_cards(card_ids):
            checklist[item.card_id].append(ChecklistItemRead.model_validate(item))

        comment_counts = await self.comment_repo.count_by_cards(card_ids)
        attachment_counts = await self.attachment_repo.count_by_cards(card_ids)

        summaries = []
        for card in cards:
            items = checklist[card.id]
            summaries.append(
                CardSummary(
                    **CardRead.model_validate(card).model_dump(),
                    assignee=_user(users, card.assignee_id),
                    created_by=_user(users, card.created_by_id),
                    tags=tags[card.id],
                    entities=entities[card.id],
                    checklist_items=items,
                    counts=CardCounts(
                        comments=comment_counts.get(card.id, 0),
                        attachments=attachment_counts.get(card.id, 0),
                        checklist_items=len(items),
                        completed_checklist_items=sum(1 for i in items if i.completed),
                    ),
                )
            )
        return summaries
