"""Shared data access for board repositories: lookups, batch loads, keyset pages."""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import and_, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.kanban.schemas.pagination import decode_cursor, encode_cursor


class BaseRepository[ModelType: SQLModel]:
    """Data access over one table keyed by a UUID `id`.

    Repositories stage changes on the session and never commit; services
    own the transaction.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def get_many(self, ids: Sequence[UUID]) -> dict[UUID, ModelType]:
        """Load rows for `ids` in one query, keyed by id. Unknown ids are absent."""
        if not ids:
            return {}
        result = await self.session.execute(
            select(self.model).where(self.model.id.in_(set(ids)))  # type: ignore[attr-defined]
        )
        return {item.id: item for item in result.scalars().all()}  # type: ignore[attr-defined]

    def add(self, entity: ModelType) -> None:
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        cursor: str | None,
        limit: int,
        cursor_field: Any,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Run a newest-first keyset page over `cursor_field`, ties broken by id.

        Returns:
            Tuple of (items, next_cursor, has_more)

        Raises:
            ValidationError: If `cursor` is not a cursor this method produced
        """
        id_field = self.model.id  # type: ignore[attr-defined]
        if cursor:
            at, last_id = decode_cursor(cursor)
            query = query.where(
                or_(cursor_field < at, and_(cursor_field == at, id_field < last_id))
            )

        query = query.order_by(cursor_field.desc(), id_field.desc()).limit(limit + 1)
        result = await self.session.execute(query)
        items = list(result.scalars().all())

        has_more = len(items) > limit
        items = items[:limit]
        next_cursor = None
        if has_more:
            last = items[-1]
            next_cursor = encode_cursor(getattr(last, cursor_field.key), last.id)  # type: ignore[attr-defined]

        return items, next_cursor, has_more
