from __future__ import annotations

import pytest

from projector.db import init_db
from projector.models import Occurrence
from projector.tasks import TaskStore


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "projector.db"
    init_db(path)
    return path


@pytest.fixture
def store(db_path) -> TaskStore:
    return TaskStore(db_path)


def make_occurrence(**overrides) -> Occurrence:
    """Occurrence with sensible defaults for tests that don't touch the database."""
    values = {
        "id": 1,
        "name": "Water plants",
        "note": "balcony too",
        "project_id": 7,
        "due_date": "2024-12-30",
        "repeat_count": 10,
        "repeat_interval": "week",
        "repeat_pattern": "mon,wed,fri",
    }
    values.update(overrides)
    return Occurrence(**values)
