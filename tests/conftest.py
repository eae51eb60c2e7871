# tests/conftest.py

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from task_manager.api.app import create_app
from task_manager.cli.bootstrap import create_initial_state
from task_manager.tasks.task_store import TaskStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the API.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="Task Manager API",
        log_level="INFO",
        host="127.0.0.1",
        port=8000,
        data_dir=data_dir,
        tasks_db_path=data_dir / "tasks.sqlite3",
        seed_demo_data=False,
    )


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "tasks.sqlite3")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 10, 9, 30, tzinfo=UTC))


@pytest.fixture()
def app(settings: SimpleNamespace):
    # Real SQLite store: its behaviour is part of what the API tests cover.
    return create_app(create_initial_state(settings=settings))


@pytest.fixture()
def client(app) -> TestClient:
    with TestClient(app) as c:
        yield c
