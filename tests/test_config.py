import json
import logging

import pytest

from hexgrid.common import load_config, setup_logging, TimedLogger
from hexgrid.common.logging import log_http_request

CONFIG_VARS = [
    "HOST",
    "PORT",
    "CORS_ALLOW_ORIGINS",
    "DEFAULT_RESOLUTION",
    "MAX_K",
    "LOG_LEVEL",
    "ENABLE_STRUCTURED_LOGGING",
    "ENVIRONMENT",
    "DEBUG",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadConfig:
    def test_defaults(self, clean_env):
        cfg = load_config()

        assert cfg.server.port == 3000
        assert cfg.server.cors_allow_origins == ["*"]
        assert cfg.h3.default_resolution == 7
        assert cfg.h3.max_k == 10
        assert cfg.environment == "development"
        assert cfg.debug is False

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
        clean_env.setenv("MAX_K", "4")
        clean_env.setenv("DEBUG", "TRUE")

        cfg = load_config()

        assert cfg.server.port == 8080
        assert cfg.server.cors_allow_origins == ["http://a.test", "http://b.test"]
        assert cfg.h3.max_k == 4
        assert cfg.debug is True

    @pytest.mark.parametrize(
        "name,value",
        [("PORT", "0"), ("PORT", "http"), ("DEFAULT_RESOLUTION", "16"), ("MAX_K", "-1")],
    )
    def test_invalid_values(self, clean_env, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(ValueError):
            load_config()

    def test_env_file_overrides_environment(self, clean_env, tmp_path):
        clean_env.setenv("PORT", "1234")
        clean_env.setenv("DEFAULT_RESOLUTION", "9")
        env_file = tmp_path / ".env"
        env_file.write_text("PORT=9090\nDEFAULT_RESOLUTION=5\n")

        cfg = load_config(str(env_file))

        assert cfg.server.port == 9090
        assert cfg.h3.default_resolution == 5

    def test_missing_env_file(self, clean_env, tmp_path):
        with pytest.raises(ValueError):
            load_config(str(tmp_path / "missing.env"))


class TestLogging:
    def test_structured_output(self, capsys):
        logger = setup_logging("hexgrid.test_structured", level="INFO", enable_structured=True)
        logger.info("handled", extra=log_http_request("GET", "/h3", status_code=200))

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["message"] == "handled"
        assert record["service"] == "hexgrid-api"
        assert record["level"] == "INFO"
        assert record["method"] == "GET"
        assert record["status_code"] == 200

    def test_http_request_entry_omits_unknowns(self):
        entry = log_http_request("POST", "/h3")
        assert entry == {"event": "http_request", "method": "POST", "path": "/h3"}

    def test_timed_logger_reports_failure(self, caplog):
        logger = logging.getLogger("timed_logger_test")

        with caplog.at_level(logging.INFO, logger="timed_logger_test"):
            with pytest.raises(RuntimeError):
                with TimedLogger(logger, "lookup"):
                    raise RuntimeError("bad cell")

        messages = [record.getMessage() for record in caplog.records]
        assert "Starting lookup" in messages
        assert "Failed lookup: bad cell" in messages
