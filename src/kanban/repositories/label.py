"""Repositories for project-scoped tags and entities and their card links."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.kanban.models import CardEntity, CardTag, Entity, Tag
from src.kanban.repositories.base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    model = Tag

    async def list_by_project(self, project_id: UUID) -> list[Tag]:
        result = await self.session.execute(
            select(Tag).where(Tag.project_id == project_id).order_by(Tag.name)
        )
        return list(result.scalars().all())

    async def get_link(self, card_id: UUID, tag_id: UUID) -> CardTag | None:
        result = await self.session.execute(
            select(CardTag).where(CardTag.card_id == card_id, CardTag.tag_id == tag_id)
        )
        return result.scalar_one_or_none()

    def add_link(self, link: CardTag) -> None:
        self.session.add(link)

    async def remove_link(self, card_id: UUID, tag_id: UUID) -> bool:
        result = await self.session.execute(
            delete(CardTag).where(CardTag.card_id == card_id, CardTag.tag_id == tag_id)  # type: ignore[arg-type]
        )
        return bool(result.rowcount)

    async def remove_all_links(self, tag_id: UUID) -> None:
        await self.session.execute(delete(CardTag).where(CardTag.tag_id == tag_id))  # type: ignore[arg-type]

    async def links_for_cards(self, card_ids: Sequence[UUID]) -> list[tuple[CardTag, Tag]]:
        if not card_ids:
            return []
        result = await self.session.execute(
            select(CardTag, Tag)
            .join(Tag, CardTag.tag_id == Tag.id)  # type: ignore[arg-type]
            .where(CardTag.card_id.in_(card_ids))  # type: ignore[attr-defined]
            .order_by(Tag.name)
        )
        return [(link, tag) for link, tag in result.all()]


class EntityRepository(BaseRepository[Entity]):
    model = Entity

    async def list_by_project(self, project_id: UUID) -> list[Entity]:
        result = await self.session.execute(
            select(Entity).where(Entity.project_id == project_id).order_by(Entity.name)
        )
        return list(result.scalars().all())

    async def get_link(self, card_id: UUID, entity_id: UUID) -> CardEntity | None:
        result = await self.session.execute(
            select(CardEntity).where(
                CardEntity.card_id == card_id, CardEntity.entity_id == entity_id
            )
        )
        return result.scalar_one_or_none()

    def add_link(self, link: CardEntity) -> None:
        self.session.add(link)

    async def remove_link(self, card_id: UUID, entity_id: UUID) -> bool:
        result = await self.session.execute(
            delete(CardEntity).where(
                CardEntity.card_id == card_id,  # type: ignore[arg-type]
                CardEntity.entity_id == entity_id,  # type: ignore[arg-type]
            )
        )
        return bool(result.rowcount)

    async def remove_all_links(self, entity_id: UUID) -> None:
        await self.session.execute(
            delete(CardEntity).where(CardEntity.entity_id == entity_id)  # type: ignore[arg-type]
        )

    async def links_for_cards(
        self, card_ids: Sequence[UUID]
    ) -> list[tuple[CardEntity, Entity]]:
        if not card_ids:
            return []
        result = await self.session.execute(
            select(CardEntity, Entity)
            .join(Entity, CardEntity.entity_id == Entity.id)  # type: ignore[arg-type]
            .where(CardEntity.card_id.in_(card_ids))  # type: ignore[attr-defined]
            .order_by(Entity.name)
        )
        return [(link, entity) for link, entity in result.all()]
