"""Checklist, comment and attachment endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, UploadFile, status

from src.kanban.api.dependencies import (
    AttachmentServiceDep,
    ChecklistServiceDep,
    CommentServiceDep,
    CurrentUserId,
)
from src.kanban.schemas.attachment import AttachmentRead
from src.kanban.schemas.checklist import (
    ChecklistItemCreate,
    ChecklistItemRead,
    ChecklistItemUpdate,
)
from src.kanban.schemas.comment import CommentCreate, CommentRead

router = APIRouter(tags=["card content"])


@router.post(
    "/cards/{card_id}/checklist",
    response_model=ChecklistItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add checklist item",
    description="Without a position the item goes after the card's last one.",
    responses={404: {"description": "Card not found"}},
)
async def create_checklist_item(
    card_id: UUID,
    request: ChecklistItemCreate,
    checklist_service: ChecklistServiceDep,
) -> ChecklistItemRead:
    item = await checklist_service.create_item(card_id, request)
    return ChecklistItemRead.model_validate(item)


@router.patch(
    "/checklist/{item_id}",
    response_model=ChecklistItemRead,
    summary="Update checklist item",
    responses={404: {"description": "Checklist item not found"}},
)
async def update_checklist_item(
    item_id: UUID,
    request: ChecklistItemUpdate,
    checklist_service: ChecklistServiceDep,
) -> ChecklistItemRead:
    item = await checklist_service.update_item(item_id, request)
    return ChecklistItemRead.model_validate(item)


@router.delete(
    "/checklist/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete checklist item",
)
async def delete_checklist_item(item_id: UUID, checklist_service: ChecklistServiceDep) -> None:
    await checklist_service.delete_item(item_id)


@router.get(
    "/cards/{card_id}/comments",
    response_model=list[CommentRead],
    summary="List comments",
    description="Comments of a card, newest first.",
)
async def list_comments(card_id: UUID, comment_service: CommentServiceDep) -> list[CommentRead]:
    return [CommentRead.model_validate(c) for c in await comment_service.list_comments(card_id)]


@router.post(
    "/cards/{card_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add comment",
    responses={404: {"description": "Card not found"}},
)
async def create_comment(
    card_id: UUID,
    request: CommentCreate,
    comment_service: CommentServiceDep,
    user_id: CurrentUserId,
) -> CommentRead:
    comment = await comment_service.create_comment(card_id, request, author_id=user_id)
    return CommentRead.model_validate(comment)


@router.delete(
    "/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete comment",
)
async def delete_comment(comment_id: UUID, comment_service: CommentServiceDep) -> None:
    await comment_service.delete_comment(comment_id)


@router.get(
    "/cards/{card_id}/attachments",
    response_model=list[AttachmentRead],
    summary="List attachments",
    description="Attachments of a card, newest first.",
)
async def list_attachments(
    card_id: UUID, attachment_service: AttachmentServiceDep
) -> list[AttachmentRead]:
    attachments = await attachment_service.list_attachments(card_id)
    return [AttachmentRead.model_validate(a) for a in attachments]


@router.post(
    "/cards/{card_id}/attachments",
    response_model=AttachmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload attachment",
    description="Accepts jpeg, jpg, png, gif, pdf, doc, docx and txt files.",
    responses={
        404: {"description": "Card not found"},
        413: {"description": "File too large"},
        415: {"description": "File type not allowed"},
    },
)
async def upload_attachment(
    card_id: UUID,
    file: Annotated[UploadFile, File(description="File to attach")],
    attachment_service: AttachmentServiceDep,
    user_id: CurrentUserId,
) -> AttachmentRead:
    # One byte past the limit is enough to reject oversized uploads
    content = await file.read(attachment_service.storage.max_bytes + 1)
    attachment = await attachment_service.create_attachment(
        card_id,
        original_name=file.filename or "",
        content_type=file.content_type,
        content=content,
        uploader_id=user_id,
    )
    return AttachmentRead.model_validate(attachment)


@router.delete(
    "/attachments/{attachment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete attachment",
)
async def delete_attachment(attachment_id: UUID, attachment_service: AttachmentServiceDep) -> None:
    await attachment_service.delete_attachment(attachment_id)
