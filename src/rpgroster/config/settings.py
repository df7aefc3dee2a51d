"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path


logger = logging.getLogger(__name__)

_DB_PATH_ENV = "RPGROSTER_DB_PATH"
_PAGE_SIZE_ENV = "RPGROSTER_PAGE_SIZE"
_LOG_LEVEL_ENV = "RPGROSTER_LOG_LEVEL"

_DB_PATH_DEFAULT = "rpgroster.sqlite"
_PAGE_SIZE_DEFAULT = 3
_LOG_LEVEL_DEFAULT = "INFO"
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    db_path: Path | str
    default_page_size: int = _PAGE_SIZE_DEFAULT
    log_level: str = _LOG_LEVEL_DEFAULT


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_log_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    level = raw.strip().upper()
    if level not in _LOG_LEVELS:
        logger.warning("Invalid log level for %s: %s; using default %s", name, raw, default)
        return default
    return level


def _env_db_path(name: str, default: str) -> Path | str:
    raw = os.getenv(name) or default
    # SQLite URIs are passed through untouched.
    if raw.startswith("file:"):
        return raw
    return Path(raw)


def load_settings() -> Settings:
    """Build settings from the environment, falling back to defaults."""

    return Settings(
        db_path=_env_db_path(_DB_PATH_ENV, _DB_PATH_DEFAULT),
        default_page_size=_env_int(_PAGE_SIZE_ENV, _PAGE_SIZE_DEFAULT, min_value=1),
        log_level=_env_log_level(_LOG_LEVEL_ENV, _LOG_LEVEL_DEFAULT),
    )
