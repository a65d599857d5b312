"""Acting-user resolution.

Authentication is out of scope: the caller names itself with `X-User-ID`,
falling back to the configured default user.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header

from src.kanban.api.dependencies.services import UserServiceDep
from src.kanban.core.exceptions import ValidationError


async def get_current_user_id(
    user_service: UserServiceDep,
    x_user_id: Annotated[str | None, Header()] = None,
) -> UUID:
    requested = None
    if x_user_id:
        try:
            requested = UUID(x_user_id)
        except ValueError as e:
            raise ValidationError("X-User-ID", "X-User-ID must be a UUID") from e
    return await user_service.resolve_actor(requested)


CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
