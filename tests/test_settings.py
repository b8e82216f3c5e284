import json
import logging

import pytest
from pydantic import ValidationError

from tablerecon.settings import JSONFormatter, Settings, load_settings, setup_logging


def test_defaults(monkeypatch):
    monkeypatch.delenv("TABLERECON_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TABLERECON_LOG_JSON", raising=False)
    settings = load_settings()
    assert settings == Settings(log_level="INFO", log_json=False)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TABLERECON_LOG_LEVEL", "debug")
    monkeypatch.setenv("TABLERECON_LOG_JSON", "true")
    settings = load_settings()
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True


def test_unknown_level_rejected(monkeypatch):
    monkeypatch.setenv("TABLERECON_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        load_settings()


def test_setup_logging_installs_one_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(Settings(log_level="WARNING", log_json=True))
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_json_formatter():
    record = logging.LogRecord("tablerecon.compare", logging.INFO, __file__, 1, "rows=%d", (3,), None)
    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "rows=3"
    assert entry["level"] == "INFO"
    assert entry["app"] == "tablerecon"
