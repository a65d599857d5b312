"""Integration test fixtures for database and HTTP client operations.

These fixtures run against the SQLite database configured in tests/conftest.py.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel

from src.kanban import models  # noqa: F401
from src.kanban.core import db
from src.kanban.core.config import get_settings
from src.kanban.core.storage import AttachmentStorage
from src.kanban.main import create_app
from src.kanban.models import User
from src.kanban.realtime import BroadcastDispatcher
from tests.factories import UserFactory
from tests.helpers import Board, build_board


@pytest.fixture
def schema() -> Generator[None]:
    """Recreate every table so each test starts from an empty database."""
    sync_engine = db.get_sync_engine()
    SQLModel.metadata.drop_all(sync_engine)
    SQLModel.metadata.create_all(sync_engine)
    yield
    db.dispose_sync_engine()


@pytest.fixture
async def engine(schema: None) -> AsyncGenerator[AsyncEngine]:
    """Provide the app's engine bound to the fresh schema."""
    await db.dispose_engine()
    yield db.get_engine()
    await db.dispose_engine()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does NOT auto-commit. Services commit for themselves; tests
    that add rows directly must call `await session.commit()`.
    """
    async with db.get_session(engine) as session:
        yield session


@pytest.fixture
async def user(db_session: AsyncSession) -> User:
    """Persist a user to act as project owner and card creator."""
    user = UserFactory.build()
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
def storage(tmp_path) -> AttachmentStorage:
    settings = get_settings()
    return AttachmentStorage(
        directory=tmp_path,
        url_prefix=settings.upload_url_prefix,
        max_bytes=1024,
        allowed_extensions=settings.upload_allowed_extensions,
    )


@pytest.fixture
def board(db_session: AsyncSession, dispatcher: BroadcastDispatcher, storage) -> Board:
    return build_board(db_session, dispatcher=dispatcher, storage=storage)


@pytest.fixture
def app(engine: AsyncEngine) -> FastAPI:
    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to a fresh app instance."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
