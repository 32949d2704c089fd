"""Configuration module for the workflow engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from workflow.core.exceptions import ConfigurationError

load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    DEBUG: bool
    STATE_COLUMN: str
    DATABASE_URL: str
    LOG_LEVEL: str
    LOG_FILE: str


def _build_config() -> Config:
    config = Config(
        DEBUG=_as_bool(os.getenv("WORKFLOW_DEBUG"), default=False),
        STATE_COLUMN=os.getenv("WORKFLOW_STATE_COLUMN", "workflow_state").strip(),
        DATABASE_URL=os.getenv("WORKFLOW_DATABASE_URL", "sqlite:///:memory:"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "WORKFLOW_DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL WORKFLOW_DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if not config.STATE_COLUMN.isidentifier():
        raise ConfigurationError("WORKFLOW_STATE_COLUMN must be a valid attribute name.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get validated configuration from the environment."""
    return _build_config()
