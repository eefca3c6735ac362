"""
Application configuration.

``Settings`` reads its values from environment variables (prefixed with
``GAMEROOM_``) at import time; every field has a default so the service can
start with no configuration at all. Tests construct ``Settings`` directly to
override individual values.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("GAMEROOM_PROJECT_NAME", "Game Room API")
    api_version: str = os.getenv("GAMEROOM_API_VERSION", "0.1.0")

    # Any SQLAlchemy URL. SQLite file by default.
    database_url: str = os.getenv("GAMEROOM_DATABASE_URL", "sqlite:///gameroom.db")
    sql_echo: bool = _env_flag("GAMEROOM_SQL_ECHO")

    log_level: str = os.getenv("GAMEROOM_LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("GAMEROOM_LOG_FILE") or None

    # Header carrying the authenticated caller identity, set by whatever sits in front of the API.
    caller_header: str = os.getenv("GAMEROOM_CALLER_HEADER", "X-Caller-Id")


def get_settings() -> Settings:
    return Settings()
