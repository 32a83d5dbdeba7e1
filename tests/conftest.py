from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from core.models import Photo
from core.services.user_store import UserStore
from infrastructure.json_repository import JsonUserRepository


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "users.json"


@pytest.fixture
def store(data_file: Path) -> UserStore:
    return UserStore(JsonUserRepository(), data_file)


@pytest.fixture
def make_photo():
    """Build photos with explicit dates so no file system access is needed."""

    def _make(path: str, when: datetime | None = None, caption: str = "") -> Photo:
        return Photo(path, caption=caption, date_taken=when or datetime(2024, 1, 1, 12, 0, 0))

    return _make
