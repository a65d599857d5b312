from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.kanban.core.config import get_settings
from src.kanban.core.exceptions import NotFoundError, PersistenceError, ValidationError
from src.kanban.core.logging import get_logger
from src.kanban.models import User
from src.kanban.repositories import UserRepository
from src.kanban.schemas.user import UserCreate

logger = get_logger(__name__)


class UserService:
    """User management service."""

    def __init__(self, user_repo: UserRepository, session: AsyncSession):
        self.user_repo = user_repo
        self.session = session

    async def get_user(self, user_id: UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def create_user(self, data: UserCreate) -> User:
        if data.email and await self.user_repo.get_by_email(data.email):
            raise ValidationError("email", f"User with email '{data.email}' already exists")

        user = User(**data.model_dump())
        self.user_repo.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Fallback in case of race condition
            await self.session.rollback()
            raise ValidationError("email", f"User with email '{data.email}' already exists") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise PersistenceError("Failed to create user") from e
        return user

    async def resolve_actor(self, user_id: UUID | None) -> UUID:
        """Id of the user a mutation is performed as.

        An explicit id must exist. Without one the configured default user is
        used, and created on first use.
        """
        if user_id is not None:
            if await self.user_repo.get_by_id(user_id) is None:
                raise ValidationError("X-User-ID", f"Unknown user {user_id}")
            return user_id

        default_id = get_settings().default_user_id
        if await self.user_repo.get_by_id(default_id) is None:
            self.user_repo.add(User(id=default_id, first_name="Default", last_name="User"))
            try:
                await self.session.commit()
            except IntegrityError:
                # Created concurrently by another request
                await self.session.rollback()
            else:
                logger.info("Default user created", user_id=str(default_id))
        return default_id
