# tests/test_cli_main.py

from __future__ import annotations

from fastapi import FastAPI

from task_manager.cli import main as cli_main


def test_main_serves_app_with_configured_host_and_port(monkeypatch, settings) -> None:
    settings.host = "0.0.0.0"
    settings.port = 8123
    calls: dict = {}

    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(
        cli_main,
        "setup_logging",
        lambda **kwargs: calls.setdefault("logging", kwargs),
    )

    def fake_run(app, **kwargs):
        calls["app"] = app
        calls["run"] = kwargs

    monkeypatch.setattr(cli_main.uvicorn, "run", fake_run)

    cli_main.main()

    assert calls["logging"]["log_dir"] == settings.data_dir
    assert isinstance(calls["app"], FastAPI)
    assert calls["run"]["host"] == "0.0.0.0"
    assert calls["run"]["port"] == 8123
    assert settings.tasks_db_path.exists()
