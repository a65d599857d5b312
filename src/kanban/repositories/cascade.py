"""Ownership deletes, child first, inside the caller's transaction.

The foreign keys also carry ON DELETE CASCADE, but deleting explicitly keeps
the behaviour identical on databases that do not enforce them (SQLite without
the foreign_keys pragma) and hands back the stored attachment filenames so the
service can remove the files once the transaction commits.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.kanban.models import (
    ActivityLog,
    Attachment,
    BoardColumn,
    Card,
    CardEntity,
    CardTag,
    ChecklistItem,
    Comment,
    Entity,
    Project,
    Tag,
)


class CascadeRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def delete_cards(self, card_ids: Sequence[UUID]) -> list[str]:
        """Delete cards and everything they own. Returns attachment filenames."""
        if not card_ids:
            return []
        ids = list(card_ids)
        result = await self.session.execute(
            select(Attachment.filename).where(Attachment.card_id.in_(ids))  # type: ignore[attr-defined]
        )
        filenames = list(result.scalars().all())

        for model in (CardTag, CardEntity, ChecklistItem, Comment, Attachment, ActivityLog):
            await self.session.execute(
                delete(model).where(model.card_id.in_(ids))  # type: ignore[attr-defined]
            )
        await self.session.execute(delete(Card).where(Card.id.in_(ids)))  # type: ignore[attr-defined]
        return filenames

    async def delete_columns(self, column_ids: Sequence[UUID]) -> list[str]:
        if not column_ids:
            return []
        ids = list(column_ids)
        result = await self.session.execute(
            select(Card.id).where(Card.column_id.in_(ids))  # type: ignore[attr-defined]
        )
        filenames = await self.delete_cards(list(result.scalars().all()))
        await self.session.execute(
            delete(BoardColumn).where(BoardColumn.id.in_(ids))  # type: ignore[attr-defined]
        )
        return filenames

    async def delete_project(self, project_id: UUID) -> list[str]:
        result = await self.session.execute(
            select(BoardColumn.id).where(BoardColumn.project_id == project_id)
        )
        filenames = await self.delete_columns(list(result.scalars().all()))

        tag_ids = select(Tag.id).where(Tag.project_id == project_id)
        entity_ids = select(Entity.id).where(Entity.project_id == project_id)
        await self.session.execute(delete(CardTag).where(CardTag.tag_id.in_(tag_ids)))  # type: ignore[attr-defined]
        await self.session.execute(
            delete(CardEntity).where(CardEntity.entity_id.in_(entity_ids))  # type: ignore[attr-defined]
        )
        await self.session.execute(delete(Tag).where(Tag.project_id == project_id))  # type: ignore[arg-type]
        await self.session.execute(delete(Entity).where(Entity.project_id == project_id))  # type: ignore[arg-type]
        await self.session.execute(
            delete(ActivityLog).where(ActivityLog.project_id == project_id)  # type: ignore[arg-type]
        )
        await self.session.execute(delete(Project).where(Project.id == project_id))  # type: ignore[arg-type]
        return filenames
