"""User endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.kanban.api.dependencies import CurrentUserId, UserServiceDep
from src.kanban.schemas.user import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=UserRead,
    summary="Acting user",
    description="The user named by X-User-ID, or the default user.",
)
async def get_current_user(user_id: CurrentUserId, user_service: UserServiceDep) -> UserRead:
    return UserRead.model_validate(await user_service.get_user(user_id))


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={400: {"description": "Invalid input or email already used"}},
)
async def create_user(request: UserCreate, user_service: UserServiceDep) -> UserRead:
    return UserRead.model_validate(await user_service.create_user(request))


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get user",
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: UUID, user_service: UserServiceDep) -> UserRead:
    return UserRead.model_validate(await user_service.get_user(user_id))
