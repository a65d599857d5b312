"""Alembic runner shared by deployment scripts and tests."""

from alembic.config import Config

from alembic import command


def run_migrations_sync(revision: str = "head", config_file: str = "alembic.ini") -> None:
    """Upgrade the configured database to `revision`.

    Blocking; call through `asyncio.to_thread` from async code.
    """
    command.upgrade(Config(config_file), revision)
