from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import NotFoundError
from src.kanban.models import ChecklistItem
from src.kanban.models.base import utc_now
from src.kanban.repositories import CardRepository, ChecklistRepository, PositionStore
from src.kanban.schemas.checklist import ChecklistItemCreate, ChecklistItemUpdate
from src.kanban.services.base import BoardService, apply_changes


class ChecklistService(BoardService):
    """Checklist items of a card, ordered by position."""

    def __init__(
        self,
        checklist_repo: ChecklistRepository,
        card_repo: CardRepository,
        session: AsyncSession,
    ):
        super().__init__(session)
        self.checklist_repo = checklist_repo
        self.card_repo = card_repo
        self.positions = PositionStore(session, ChecklistItem, "card_id")

    async def get_item(self, item_id: UUID) -> ChecklistItem:
        item = await self.checklist_repo.get_by_id(item_id)
        if item is None:
            raise NotFoundError("Checklist item", item_id)
        return item

    async def create_item(self, card_id: UUID, data: ChecklistItemCreate) -> ChecklistItem:
        """Add an item; without an explicit position it goes after the last one."""
        if await self.card_repo.get_by_id(card_id) is None:
            raise NotFoundError("Card", card_id)
        position = data.position
        if position is None:
            position = await self.positions.next_position(card_id)
        item = ChecklistItem(
            title=data.title,
            completed=data.completed,
            position=position,
            card_id=card_id,
        )
        self.checklist_repo.add(item)
        await self._commit("create checklist item")
        return item

    async def update_item(self, item_id: UUID, data: ChecklistItemUpdate) -> ChecklistItem:
        item = await self.get_item(item_id)
        apply_changes(
            item,
            data.model_dump(exclude_unset=True),
            required={"title", "completed", "position"},
        )
        item.updated_at = utc_now()
        await self._commit("update checklist item")
        return item

    async def delete_item(self, item_id: UUID) -> None:
        item = await self.get_item(item_id)
        await self.checklist_repo.delete(item)
        await self._commit("delete checklist item")
