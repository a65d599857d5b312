from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.exceptions import NotFoundError
from src.kanban.models import ActivityAction, Comment
from src.kanban.repositories import CardRepository, CommentRepository
from src.kanban.schemas.comment import CommentCreate
from src.kanban.services.activity_service import ActivityService
from src.kanban.services.base import BoardService


class CommentService(BoardService):
    """Comments are immutable: create, list and delete only."""

    def __init__(
        self,
        comment_repo: CommentRepository,
        card_repo: CardRepository,
        session: AsyncSession,
        activity: ActivityService | None = None,
    ):
        super().__init__(session)
        self.comment_repo = comment_repo
        self.card_repo = card_repo
        self.activity = activity

    async def _card_project(self, card_id: UUID) -> UUID:
        project_id = await self.card_repo.get_project_id(card_id)
        if project_id is None:
            raise NotFoundError("Card", card_id)
        return project_id

    async def list_comments(self, card_id: UUID) -> list[Comment]:
        await self._card_project(card_id)
        return await self.comment_repo.list_by_card(card_id)

    async def create_comment(self, card_id: UUID, data: CommentCreate, author_id: UUID) -> Comment:
        project_id = await self._card_project(card_id)
        comment = Comment(content=data.content, card_id=card_id, author_id=author_id)
        self.comment_repo.add(comment)
        await self._commit("create comment")

        if self.activity is not None:
            await self.activity.record(
                ActivityAction.COMMENT_ADDED,
                "Comment added",
                user_id=author_id,
                project_id=project_id,
                card_id=card_id,
                details={"commentId": str(comment.id)},
            )
        return comment

    async def delete_comment(self, comment_id: UUID) -> None:
        comment = await self.comment_repo.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", comment_id)
        await self.comment_repo.delete(comment)
        await self._commit("delete comment")
