# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from task_manager.config import DEFAULT_APP_NAME, Settings

_VARS = (
    "TASKS_APP_NAME",
    "TASKS_LOG_LEVEL",
    "TASKS_HOST",
    "TASKS_PORT",
    "PORT",
    "TASKS_DATA_DIR",
    "TASKS_DB_PATH",
    "TASKS_SEED_DEMO_DATA",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.app_name == DEFAULT_APP_NAME
    assert s.log_level == "INFO"
    assert s.host == "127.0.0.1"
    assert s.port == 8000
    assert s.data_dir == Path(".local/tasks")
    assert s.tasks_db_path == Path(".local/tasks") / "tasks.sqlite3"
    assert s.seed_demo_data is True


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKS_APP_NAME", "Chores")
    monkeypatch.setenv("TASKS_HOST", "0.0.0.0")
    monkeypatch.setenv("TASKS_PORT", "9090")
    monkeypatch.setenv("TASKS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKS_SEED_DEMO_DATA", "no")

    s = Settings.from_env()
    assert s.app_name == "Chores"
    assert s.host == "0.0.0.0"
    assert s.port == 9090
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.seed_demo_data is False


def test_db_path_override_wins_over_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKS_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("TASKS_DB_PATH", str(tmp_path / "elsewhere.db"))
    assert Settings.from_env().tasks_db_path == tmp_path / "elsewhere.db"


def test_port_falls_back_to_platform_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "5005")
    assert Settings.from_env().port == 5005


def test_bad_int_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKS_PORT", "eighty")
    assert Settings.from_env().port == 8000


def test_settings_are_frozen() -> None:
    s = Settings.from_env()
    with pytest.raises(AttributeError):
        s.port = 1  # type: ignore[misc]
