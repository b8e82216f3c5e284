"""
Process-level settings for the HTTP host.

Read once from the environment:
- TABLERECON_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default INFO)
- TABLERECON_LOG_JSON: "1"/"true" for one JSON object per log line
"""

from __future__ import annotations

import json
import logging
import sys

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "tablerecon"


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="One JSON object per log line")

    model_config = SettingsConfigDict(env_prefix="TABLERECON_")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value!r}")
        return value


def load_settings() -> Settings:
    return Settings()


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "app": APP_NAME,
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(settings: Settings) -> None:
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level))
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if settings.log_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    root_logger.addHandler(handler)
