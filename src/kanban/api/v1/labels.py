"""Tag and entity endpoints, and their links to cards."""

from uuid import UUID

from fastapi import APIRouter, status

from src.kanban.api.dependencies import LabelServiceDep
from src.kanban.schemas.label import (
    CardEntityRead,
    CardTagRead,
    EntityCreate,
    EntityRead,
    EntityUpdate,
    TagCreate,
    TagRead,
    TagUpdate,
)

router = APIRouter(tags=["labels"])


@router.get("/projects/{project_id}/tags", response_model=list[TagRead], summary="List tags")
async def list_tags(project_id: UUID, label_service: LabelServiceDep) -> list[TagRead]:
    return [TagRead.model_validate(t) for t in await label_service.list_tags(project_id)]


@router.post(
    "/projects/{project_id}/tags",
    response_model=TagRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create tag",
    responses={404: {"description": "Project not found"}},
)
async def create_tag(project_id: UUID, request: TagCreate, label_service: LabelServiceDep) -> TagRead:
    return TagRead.model_validate(await label_service.create_tag(project_id, request))


@router.patch("/tags/{tag_id}", response_model=TagRead, summary="Update tag")
async def update_tag(tag_id: UUID, request: TagUpdate, label_service: LabelServiceDep) -> TagRead:
    return TagRead.model_validate(await label_service.update_tag(tag_id, request))


@router.delete("/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete tag")
async def delete_tag(tag_id: UUID, label_service: LabelServiceDep) -> None:
    await label_service.delete_tag(tag_id)


@router.post(
    "/cards/{card_id}/tags/{tag_id}",
    response_model=CardTagRead,
    status_code=status.HTTP_201_CREATED,
    summary="Tag a card",
    description="The tag must belong to the card's project.",
    responses={
        400: {"description": "Tag belongs to another project"},
        404: {"description": "Card or tag not found"},
    },
)
async def add_card_tag(card_id: UUID, tag_id: UUID, label_service: LabelServiceDep) -> CardTagRead:
    link, tag = await label_service.add_card_tag(card_id, tag_id)
    return CardTagRead(
        id=link.id, card_id=link.card_id, tag_id=link.tag_id, tag=TagRead.model_validate(tag)
    )


@router.delete(
    "/cards/{card_id}/tags/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Untag a card",
)
async def remove_card_tag(card_id: UUID, tag_id: UUID, label_service: LabelServiceDep) -> None:
    await label_service.remove_card_tag(card_id, tag_id)


@router.get(
    "/projects/{project_id}/entities", response_model=list[EntityRead], summary="List entities"
)
async def list_entities(project_id: UUID, label_service: LabelServiceDep) -> list[EntityRead]:
    return [EntityRead.model_validate(e) for e in await label_service.list_entities(project_id)]


@router.post(
    "/projects/{project_id}/entities",
    response_model=EntityRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create entity",
    responses={404: {"description": "Project not found"}},
)
async def create_entity(
    project_id: UUID, request: EntityCreate, label_service: LabelServiceDep
) -> EntityRead:
    return EntityRead.model_validate(await label_service.create_entity(project_id, request))


@router.patch("/entities/{entity_id}", response_model=EntityRead, summary="Update entity")
async def update_entity(
    entity_id: UUID, request: EntityUpdate, label_service: LabelServiceDep
) -> EntityRead:
    return EntityRead.model_validate(await label_service.update_entity(entity_id, request))


@router.delete(
    "/entities/{entity_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete entity"
)
async def delete_entity(entity_id: UUID, label_service: LabelServiceDep) -> None:
    await label_service.delete_entity(entity_id)


@router.post(
    "/cards/{card_id}/entities/{entity_id}",
    response_model=CardEntityRead,
    status_code=status.HTTP_201_CREATED,
    summary="Link an entity to a card",
    description="The entity must belong to the card's project.",
    responses={
        400: {"description": "Entity belongs to another project"},
        404: {"description": "Card or entity not found"},
    },
)
async def add_card_entity(
    card_id: UUID, entity_id: UUID, label_service: LabelServiceDep
) -> CardEntityRead:
    link, entity = await label_service.add_card_entity(card_id, entity_id)
    return CardEntityRead(
        id=link.id,
        card_id=link.card_id,
        entity_id=link.entity_id,
        entity=EntityRead.model_validate(entity),
    )


@router.delete(
    "/cards/{card_id}/entities/{entity_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unlink an entity from a card",
)
async def remove_card_entity(
    card_id: UUID, entity_id: UUID, label_service: LabelServiceDep
) -> None:
    await label_service.remove_card_entity(card_id, entity_id)
