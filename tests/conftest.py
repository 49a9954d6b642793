from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.settings import refresh_all_settings
from tests.models import User


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a per-test file seeded from the template."""
    settings_path = tmp_path / "settings.yaml"
    monkeypatch.setenv("PAYLOADS_SETTINGS_PATH", str(settings_path))
    monkeypatch.delenv("LOGFIRE_TOKEN", raising=False)
    refresh_all_settings()
    yield settings_path
    refresh_all_settings()


@pytest.fixture
def lilo() -> User:
    return User(
        id=1,
        first_name="Lilo",
        last_name="Pelekai",
        age=6,
        inserted_at=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
def user_fields() -> dict:
    return {
        "id": "integer",
        "first_name": "string",
        "last_name": "string",
        "age": "integer",
        "planet": "enum",
        "inserted_at": "date",
    }
