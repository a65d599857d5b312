"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from src.kanban.core.config import Settings

pytestmark = pytest.mark.unit


def test_cors_wildcard_rejected():
    with pytest.raises(ValidationError):
        Settings(cors_origins=["*"])


def test_paths_must_be_absolute():
    with pytest.raises(ValidationError):
        Settings(ws_path="ws")


def test_trailing_slash_trimmed():
    settings = Settings(ws_path="/ws/", upload_url_prefix="/files/")

    assert settings.ws_path == "/ws"
    assert settings.upload_url_prefix == "/files"


def test_extensions_normalized():
    settings = Settings(upload_allowed_extensions=[".PNG", "Pdf"])

    assert settings.upload_allowed_extensions == ["png", "pdf"]


def test_sqlite_detection():
    assert Settings(database_url="sqlite+aiosqlite:///./board.db").is_sqlite
    assert not Settings(database_url="postgresql+asyncpg://u:p@h/db").is_sqlite
