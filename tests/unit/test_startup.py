"""Unit tests for logging configuration and the startup entrypoint."""

import json
import logging

import pytest

from libs.common.config import ConfigValidationError
from libs.common.logging import JsonFormatter, configure_logging
from services.events_service.app import main as startup_main


@pytest.fixture
def root_logger():
    """Restore the root logger's handlers and level after the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_emits_json():
    record = logging.LogRecord(
        "events", logging.WARNING, __file__, 1, "slug %s taken", ("party",), None
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["name"] == "events"
    assert payload["message"] == "slug party taken"


def test_configure_logging_uses_plain_format_under_test(root_logger):
    configure_logging()

    (handler,) = root_logger.handlers
    assert not isinstance(handler.formatter, JsonFormatter)
    assert root_logger.level == logging.INFO


def test_startup_returns_settings(root_logger):
    settings = startup_main.startup()

    assert settings.NODE_ENV == "test"


def test_main_fails_on_invalid_config(monkeypatch, capsys):
    def broken_settings():
        raise ConfigValidationError("Config validation error: HOST missing")

    monkeypatch.setattr(startup_main, "get_settings", broken_settings)

    assert startup_main.main() == 1
    assert "HOST missing" in capsys.readouterr().err


def test_main_succeeds_when_database_answers(monkeypatch, root_logger):
    async def database_ok():
        return True

    monkeypatch.setattr(startup_main, "check_database", database_ok)

    assert startup_main.main() == 0
