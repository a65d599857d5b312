"""The Alembic history builds the same schema the models declare."""

import pytest
from sqlalchemy import inspect, text
from sqlmodel import SQLModel

from src.kanban.core.config import get_settings
from src.kanban.core.db import get_sync_engine, run_migrations_sync

pytestmark = pytest.mark.integration


def test_upgrade_creates_every_table_and_default_user(schema):
    sync_engine = get_sync_engine()
    SQLModel.metadata.drop_all(sync_engine)
    with sync_engine.begin() as conn:
        conn.execute(text("DROP TABLE IF EXISTS alembic_version"))

    run_migrations_sync("head")

    tables = set(inspect(sync_engine).get_table_names())
    assert set(SQLModel.metadata.tables) <= tables
    with sync_engine.connect() as conn:
        default_id = conn.execute(text("SELECT id FROM users")).scalar_one()
    assert default_id.replace("-", "") == get_settings().default_user_id.hex
