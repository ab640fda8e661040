import logging
import os

import pytest
from fastapi import FastAPI

from hexgrid.api import server


@pytest.fixture
def uvicorn_calls(monkeypatch):
    calls = []
    monkeypatch.setattr(server.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    return calls


def test_parse_arguments():
    args = server.parse_arguments(["--port", "8080", "--log-level", "DEBUG", "--reload"])

    assert args.port == 8080
    assert args.log_level == "DEBUG"
    assert args.reload is True
    assert args.config is None


def test_main_serves_app_with_overrides(uvicorn_calls):
    server.main(["--host", "127.0.0.1", "--port", "8123"])

    app, kwargs = uvicorn_calls[0]
    assert isinstance(app, FastAPI)
    assert app.state.config.server.port == 8123
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8123


def test_main_reload_uses_factory(uvicorn_calls, monkeypatch):
    monkeypatch.setenv("PORT", "3000")
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    server.main(["--reload", "--port", "8124"])

    target, kwargs = uvicorn_calls[0]
    assert target == "hexgrid.api.app:create_app"
    assert kwargs["factory"] is True
    assert kwargs["reload"] is True


def test_log_level_applies_to_component_loggers(uvicorn_calls):
    try:
        server.main(["--log-level", "WARNING"])
        assert logging.getLogger("hexgrid.api").level == logging.WARNING
    finally:
        server.set_log_level("INFO")


def test_bad_config_file_exits(uvicorn_calls, tmp_path):
    with pytest.raises(SystemExit):
        server.main(["--config", str(tmp_path / "missing.env")])
    assert uvicorn_calls == []


def test_reload_passes_log_level_to_child(uvicorn_calls, monkeypatch):
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "3000")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    try:
        server.main(["--reload", "--log-level", "DEBUG"])

        assert os.environ["LOG_LEVEL"] == "DEBUG"
        assert uvicorn_calls[0][1]["log_level"] == "debug"
    finally:
        server.set_log_level("INFO")
