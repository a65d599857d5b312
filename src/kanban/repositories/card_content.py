"""Repositories for records owned by a card: checklist, comments, attachments."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.kanban.models import Attachment, ChecklistItem, Comment
from src.kanban.repositories.base import BaseRepository


class ChecklistRepository(BaseRepository[ChecklistItem]):
    model = ChecklistItem

    async def list_for_cards(self, card_ids: Sequence[UUID]) -> list[ChecklistItem]:
        if not card_ids:
            return []
        result = await self.session.execute(
            select(ChecklistItem)
            .where(ChecklistItem.card_id.in_(card_ids))  # type: ignore[attr-defined]
            .order_by(ChecklistItem.position, ChecklistItem.created_at)
        )
        return list(result.scalars().all())


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    async def list_by_card(self, card_id: UUID) -> list[Comment]:
        """Comments newest first."""
        result = await self.session.execute(
            select(Comment)
            .where(Comment.card_id == card_id)
            .order_by(Comment.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def count_by_cards(self, card_ids: Sequence[UUID]) -> dict[UUID, int]:
        if not card_ids:
            return {}
        result = await self.session.execute(
            select(Comment.card_id, func.count())
            .where(Comment.card_id.in_(card_ids))  # type: ignore[attr-defined]
            .group_by(Comment.card_id)
        )
        return {card_id: count for card_id, count in result.all()}


class AttachmentRepository(BaseRepository[Attachment]):
    model = Attachment

    async def list_by_card(self, card_id: UUID) -> list[Attachment]:
        """Attachments newest first."""
        result = await self.session.execute(
            select(Attachment)
            .where(Attachment.card_id == card_id)
            .order_by(Attachment.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def count_by_cards(self, card_ids: Sequence[UUID]) -> dict[UUID, int]:
        if not card_ids:
            return {}
        result = await self.session.execute(
            select(Attachment.card_id, func.count())
            .where(Attachment.card_id.in_(card_ids))  # type: ignore[attr-defined]
            .group_by(Attachment.card_id)
        )
        return {card_id: count for card_id, count in result.all()}
