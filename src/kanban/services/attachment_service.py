from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import NotFoundError, PersistenceError
from src.kanban.core.logging import get_logger
from src.kanban.core.storage import AttachmentStorage
from src.kanban.models import ActivityAction, Attachment
from src.kanban.repositories import AttachmentRepository, CardRepository
from src.kanban.services.activity_service import ActivityService
from src.kanban.services.base import BoardService

logger = get_logger(__name__)


class AttachmentService(BoardService):
    """Card attachments stored on local disk."""

    def __init__(
        self,
        attachment_repo: AttachmentRepository,
        card_repo: CardRepository,
        storage: AttachmentStorage,
        session: AsyncSession,
        activity: ActivityService | None = None,
    ):
        super().__init__(session)
        self.attachment_repo = attachment_repo
        self.card_repo = card_repo
        self.storage = storage
        self.activity = activity

    async def _card_project(self, card_id: UUID) -> UUID:
        project_id = await self.card_repo.get_project_id(card_id)
        if project_id is None:
            raise NotFoundError("Card", card_id)
        return project_id

    async def list_attachments(self, card_id: UUID) -> list[Attachment]:
        await self._card_project(card_id)
        return await self.attachment_repo.list_by_card(card_id)

    async def create_attachment(
        self,
        card_id: UUID,
        original_name: str,
        content_type: str | None,
        content: bytes,
        uploader_id: UUID,
    ) -> Attachment:
        """Validate and store an upload, then record it.

        Raises:
            UnsupportedMediaTypeError: Extension or MIME type outside the allow-list
            PayloadTooLargeError: Content larger than the configured limit
        """
        project_id = await self._card_project(card_id)
        stored = await self.storage.save(original_name, content_type, content)

        attachment = Attachment(
            filename=stored.filename,
            original_name=stored.original_name,
            mime_type=stored.mime_type,
            size=stored.size,
            url=stored.url,
            card_id=card_id,
            uploaded_by_id=uploader_id,
        )
        self.attachment_repo.add(attachment)
        try:
            await self._commit("create attachment")
        except PersistenceError:
            await self.storage.remove([stored.filename])
            raise

        if self.activity is not None:
            await self.activity.record(
                ActivityAction.ATTACHMENT_ADDED,
                f'File "{stored.original_name}" was attached',
                user_id=uploader_id,
                project_id=project_id,
                card_id=card_id,
                details={"filename": stored.filename, "size": stored.size},
            )
        return attachment

    async def delete_attachment(self, attachment_id: UUID) -> None:
        attachment = await self.attachment_repo.get_by_id(attachment_id)
        if attachment is None:
            raise NotFoundError("Attachment", attachment_id)
        filename = attachment.filename
        await self.attachment_repo.delete(attachment)
        await self._commit("delete attachment")

        await self.storage.remove([filename])
        logger.info("Attachment deleted", attachment_id=str(attachment_id), filename=filename)
