"""Card operations, including the move between columns."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import NotFoundError, ValidationError
from src.kanban.core.logging import get_logger
from src.kanban.core.storage import AttachmentStorage
from src.kanban.models import ActivityAction, Card
from src.kanban.models.base import utc_now
from src.kanban.realtime import BroadcastDispatcher
from src.kanban.repositories import (
    CardRepository,
    CascadeRepository,
    ColumnRepository,
    PositionStore,
    UserRepository,
)
from src.kanban.schemas.card import CardCreate, CardRead, CardUpdate
from src.kanban.schemas.events import (
    CardCreatedEvent,
    CardDeleted,
    CardDeletedEvent,
    CardMoved,
    CardMovedEvent,
    CardsReordered,
    CardsReorderedEvent,
    CardUpdatedEvent,
)
from src.kanban.schemas.position import PositionUpdate
from src.kanban.services.activity_service import ActivityService
from src.kanban.services.base import BoardService, apply_changes

logger = get_logger(__name__)


class CardService(BoardService):
    def __init__(
        self,
        card_repo: CardRepository,
        column_repo: ColumnRepository,
        cascade_repo: CascadeRepository,
        user_repo: UserRepository,
        session: AsyncSession,
        dispatcher: BroadcastDispatcher | None = None,
        activity: ActivityService | None = None,
        storage: AttachmentStorage | None = None,
    ):
        super().__init__(session, dispatcher)
        self.card_repo = card_repo
        self.column_repo = column_repo
        self.cascade_repo = cascade_repo
        self.user_repo = user_repo
        self.positions = PositionStore(session, Card, "column_id")
        self.activity = activity
        self.storage = storage

    async def get_card(self, card_id: UUID) -> Card:
        card = await self.card_repo.get_by_id(card_id)
        if card is None:
            raise NotFoundError("Card", card_id)
        return card

    async def _project_of(self, column_id: UUID) -> UUID:
        column = await self.column_repo.get_by_id(column_id)
        if column is None:
            raise NotFoundError("Column", column_id)
        return column.project_id

    async def _check_assignee(self, assignee_id: UUID | None) -> None:
        if assignee_id is not None and await self.user_repo.get_by_id(assignee_id) is None:
            raise ValidationError("assignee_id", f"Unknown user {assignee_id}")

    async def create_card(self, column_id: UUID, data: CardCreate, creator_id: UUID) -> Card:
        """Append a card after the column's last one."""
        project_id = await self._project_of(column_id)
        await self._check_assignee(data.assignee_id)
        card = Card(
            **data.model_dump(exclude={"priority"}),
            priority=data.priority.value,
            column_id=column_id,
            position=await self.positions.next_position(column_id),
            created_by_id=creator_id,
        )
        self.card_repo.add(card)
        await self._commit("create card")

        logger.info("Card created", card_id=str(card.id), position=card.position)
        await self._publish(project_id, CardCreatedEvent(data=CardRead.model_validate(card)))
        if self.activity is not None:
            await self.activity.record(
                ActivityAction.CARD_CREATED,
                f'Card "{card.title}" was created',
                user_id=creator_id,
                project_id=project_id,
                card_id=card.id,
                details={"cardTitle": card.title},
            )
        return card

    async def update_card(self, card_id: UUID, data: CardUpdate, actor_id: UUID) -> Card:
        card = await self.get_card(card_id)
        was_completed = card.completed
        await self._check_assignee(data.assignee_id)
        apply_changes(
            card,
            data.model_dump(exclude_unset=True),
            required={"title", "priority", "completed"},
        )
        card.updated_at = utc_now()
        await self._commit("update card")

        project_id = await self._project_of(card.column_id)
        await self._publish(project_id, CardUpdatedEvent(data=CardRead.model_validate(card)))
        if self.activity is not None and card.completed and not was_completed:
            await self.activity.record(
                ActivityAction.CARD_COMPLETED,
                f'Card "{card.title}" was completed',
                user_id=actor_id,
                project_id=project_id,
                card_id=card.id,
            )
        return card

    async def move_card(
        self, card_id: UUID, column_id: UUID, position: int, actor_id: UUID
    ) -> Card:
        """Put a card at `position` in `column_id` with one UPDATE.

        Siblings are not renumbered. Concurrent moves of the same card are
        last-write-wins; the card is always in exactly one column. Cards stay
        within their project, so tag and entity links remain valid.

        Raises:
            NotFoundError: If the card or the target column does not exist
            ValidationError: If the target column belongs to another project
        """
        card = await self.get_card(card_id)
        from_column_id = card.column_id
        project_id = await self._project_of(from_column_id)
        if column_id != from_column_id and await self._project_of(column_id) != project_id:
            raise ValidationError("column_id", f"Column {column_id} belongs to another project")

        if not await self.card_repo.move(card_id, column_id, position):
            # Deleted between the read and the update
            await self.session.rollback()
            raise NotFoundError("Card", card_id)
        await self._commit("move card")
        await self.session.refresh(card)

        logger.info(
            "Card moved",
            card_id=str(card_id),
            from_column_id=str(from_column_id),
            column_id=str(column_id),
            position=position,
        )
        await self._publish(
            project_id,
            CardMovedEvent(
                data=CardMoved(
                    card_id=card_id,
                    from_column_id=from_column_id,
                    column_id=column_id,
                    position=position,
                )
            ),
        )
        if self.activity is not None and from_column_id != column_id:
            await self.activity.record(
                ActivityAction.CARD_MOVED,
                f'Card "{card.title}" was moved',
                user_id=actor_id,
                project_id=project_id,
                card_id=card_id,
                details={"fromColumnId": str(from_column_id), "toColumnId": str(column_id)},
            )
        return card

    async def reorder_cards(self, column_id: UUID, orders: list[PositionUpdate]) -> int:
        """Reassign card positions in one column atomically. Ids outside it are ignored."""
        project_id = await self._project_of(column_id)
        updated = await self.positions.reorder(column_id, orders)

        await self._publish(
            project_id,
            CardsReorderedEvent(data=CardsReordered(column_id=column_id, card_orders=orders)),
        )
        return updated

    async def delete_card(self, card_id: UUID) -> None:
        """Delete a card with its links, checklist, comments and attachments."""
        card = await self.get_card(card_id)
        column_id = card.column_id
        project_id = await self._project_of(column_id)
        filenames = await self.cascade_repo.delete_cards([card_id])
        await self._commit("delete card")

        logger.info("Card deleted", card_id=str(card_id), files=len(filenames))
        if self.storage is not None:
            await self.storage.remove(filenames)
        await self._publish(
            project_id, CardDeletedEvent(data=CardDeleted(id=card_id, column_id=column_id))
        )
