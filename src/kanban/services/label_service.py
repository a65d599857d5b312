"""Project-scoped tags and entities, and linking them to cards."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import NotFoundError, PersistenceError, ValidationError
from src.kanban.models import CardEntity, CardTag, Entity, Tag
from src.kanban.models.base import utc_now
from src.kanban.repositories import (
    CardRepository,
    EntityRepository,
    ProjectRepository,
    TagRepository,
)
from src.kanban.schemas.label import EntityCreate, EntityUpdate, TagCreate, TagUpdate
from src.kanban.services.base import BoardService, apply_changes


class LabelService(BoardService):
    """Scoped CRUD for tags and entities. Nothing here is broadcast."""

    def __init__(
        self,
        tag_repo: TagRepository,
        entity_repo: EntityRepository,
        project_repo: ProjectRepository,
        card_repo: CardRepository,
        session: AsyncSession,
    ):
        super().__init__(session)
        self.tag_repo = tag_repo
        self.entity_repo = entity_repo
        self.project_repo = project_repo
        self.card_repo = card_repo

    async def _require_project(self, project_id: UUID) -> None:
        if await self.project_repo.get_by_id(project_id) is None:
            raise NotFoundError("Project", project_id)

    async def _card_project(self, card_id: UUID) -> UUID:
        project_id = await self.card_repo.get_project_id(card_id)
        if project_id is None:
            raise NotFoundError("Card", card_id)
        return project_id

    # Tags

    async def get_tag(self, tag_id: UUID) -> Tag:
        tag = await self.tag_repo.get_by_id(tag_id)
        if tag is None:
            raise NotFoundError("Tag", tag_id)
        return tag

    async def list_tags(self, project_id: UUID) -> list[Tag]:
        await self._require_project(project_id)
        return await self.tag_repo.list_by_project(project_id)

    async def create_tag(self, project_id: UUID, data: TagCreate) -> Tag:
        await self._require_project(project_id)
        tag = Tag(**data.model_dump(), project_id=project_id)
        self.tag_repo.add(tag)
        await self._commit("create tag")
        return tag

    async def update_tag(self, tag_id: UUID, data: TagUpdate) -> Tag:
        tag = await self.get_tag(tag_id)
        apply_changes(tag, data.model_dump(exclude_unset=True), required={"name", "color"})
        await self._commit("update tag")
        return tag

    async def delete_tag(self, tag_id: UUID) -> None:
        tag = await self.get_tag(tag_id)
        await self.tag_repo.remove_all_links(tag_id)
        await self.tag_repo.delete(tag)
        await self._commit("delete tag")

    async def add_card_tag(self, card_id: UUID, tag_id: UUID) -> tuple[CardTag, Tag]:
        """Link a tag to a card. Linking twice returns the existing link."""
        project_id = await self._card_project(card_id)
        tag = await self.get_tag(tag_id)
        if tag.project_id != project_id:
            raise ValidationError("tag_id", "Tag belongs to a different project")

        existing = await self.tag_repo.get_link(card_id, tag_id)
        if existing is not None:
            return existing, tag
        link = CardTag(card_id=card_id, tag_id=tag_id)
        self.tag_repo.add_link(link)
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Linked concurrently
            await self.session.rollback()
            existing = await self.tag_repo.get_link(card_id, tag_id)
            if existing is None:
                raise PersistenceError("Failed to link card") from e
            return existing, tag
        return link, tag

    async def remove_card_tag(self, card_id: UUID, tag_id: UUID) -> None:
        if not await self.tag_repo.remove_link(card_id, tag_id):
            await self.session.rollback()
            raise NotFoundError("Card tag", f"{card_id}/{tag_id}")
        await self._commit("remove card tag")

    # Entities

    async def get_entity(self, entity_id: UUID) -> Entity:
        entity = await self.entity_repo.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError("Entity", entity_id)
        return entity

    async def list_entities(self, project_id: UUID) -> list[Entity]:
        await self._require_project(project_id)
        return await self.entity_repo.list_by_project(project_id)

    async def create_entity(self, project_id: UUID, data: EntityCreate) -> Entity:
        await self._require_project(project_id)
        entity = Entity(
            name=data.name,
            type=data.type.value,
            data=data.data,
            project_id=project_id,
        )
        self.entity_repo.add(entity)
        await self._commit("create entity")
        return entity

    async def update_entity(self, entity_id: UUID, data: EntityUpdate) -> Entity:
        entity = await self.get_entity(entity_id)
        apply_changes(entity, data.model_dump(exclude_unset=True), required={"name", "type"})
        entity.updated_at = utc_now()
        await self._commit("update entity")
        return entity

    async def delete_entity(self, entity_id: UUID) -> None:
        entity = await self.get_entity(entity_id)
        await self.entity_repo.remove_all_links(entity_id)
        await self.entity_repo.delete(entity)
        await self._commit("delete entity")

    async def add_card_entity(self, card_id: UUID, entity_id: UUID) -> tuple[CardEntity, Entity]:
        """Link an entity to a card. Linking twice returns the existing link."""
        project_id = await self._card_project(card_id)
        entity = await self.get_entity(entity_id)
        if entity.project_id != project_id:
            raise ValidationError("entity_id", "Entity belongs to a different project")

        existing = await self.entity_repo.get_link(card_id, entity_id)
        if existing is not None:
            return existing, entity
        link = CardEntity(card_id=card_id, entity_id=entity_id)
        self.entity_repo.add_link(link)
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Linked concurrently
            await self.session.rollback()
            existing = await self.entity_repo.get_link(card_id, entity_id)
            if existing is None:
                raise PersistenceError("Failed to link card") from e
            return existing, entity
        return link, entity

    async def remove_card_entity(self, card_id: UUID, entity_id: UUID) -> None:
        if not await self.entity_repo.remove_link(card_id, entity_id):
            await self.session.rollback()
            raise NotFoundError("Card entity", f"{card_id}/{entity_id}")
        await self._commit("remove card entity")
