from __future__ import annotations

import json
import sys

from loguru import logger

from userhub.core import config as core_config
from userhub.core.logging import configure_logging


def test_settings_read_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_ENV", "Production")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'x.db'}")
    monkeypatch.setenv("PORT", "not-a-number")
    monkeypatch.delenv("LOG_CONSOLE", raising=False)
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
    finally:
        core_config.get_settings.cache_clear()

    assert settings.app_env == "production"
    assert settings.is_production
    assert settings.log_console is False
    assert settings.port == 3000
    assert settings.database_url.endswith("x.db")


def test_settings_defaults(monkeypatch):
    for name in ("APP_ENV", "DATABASE_URL", "LOG_LEVEL", "LOG_CONSOLE", "PORT"):
        monkeypatch.delenv(name, raising=False)
    core_config.get_settings.cache_clear()
    try:
        settings = core_config.get_settings()
    finally:
        core_config.get_settings.cache_clear()

    assert settings.app_env == "dev"
    assert settings.log_console is True
    assert settings.log_level == "INFO"
    assert settings.database_url.startswith("sqlite:///")
    assert settings.database_url.endswith("app.db")


def test_configure_logging_writes_json_files(tmp_path):
    settings = core_config.Settings(
        app_env="test",
        database_url="sqlite://",
        log_level="INFO",
        log_dir=str(tmp_path / "logs"),
        log_console=False,
        host="127.0.0.1",
        port=3000,
    )
    log_dir = configure_logging(settings)
    try:
        logger.bind(user_id="abc").info("User created")
        logger.error("Store failure")
        logger.complete()
    finally:
        logger.remove()
        logger.add(sys.stderr)

    combined = [json.loads(line) for line in (log_dir / "combined.log").read_text().splitlines()]
    errors = [json.loads(line) for line in (log_dir / "error.log").read_text().splitlines()]
    assert [entry["record"]["message"] for entry in combined] == ["User created", "Store failure"]
    assert combined[0]["record"]["extra"] == {"user_id": "abc"}
    assert [entry["record"]["message"] for entry in errors] == ["Store failure"]
