"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database-specific fixtures are in tests/integration/conftest.py.
"""

import os
import tempfile

# Point the app at a throwaway SQLite database before any app imports
_TEST_DIR = tempfile.mkdtemp(prefix="kanban-tests-")
os.environ.setdefault("APP_ENV", "testing")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_DIR, "uploads")
os.environ.pop("DATABASE_MIGRATIONS_URL", None)
os.environ.pop("METRICS_API_KEY", None)

# ruff: noqa: E402 - Imports must be after env var setup
from uuid import uuid4

import pytest

from src.kanban.core.config import get_settings
from src.kanban.realtime import BroadcastDispatcher, ConnectionRegistry

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def registry() -> ConnectionRegistry:
    return ConnectionRegistry()


@pytest.fixture
def dispatcher(registry: ConnectionRegistry) -> BroadcastDispatcher:
    return BroadcastDispatcher(registry, send_timeout=0.5)


@pytest.fixture
def project_id():
    return uuid4()
