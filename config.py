# config.py

"""Application configuration utilities.

Values are primarily loaded from ``config.json`` and may be overridden by
environment variables. The :func:`get_settings` helper merges the two sources
and caches the result.
"""

from __future__ import annotations

import json
import os
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class DefaultSubscription(str, Enum):
    """Subscription type assigned to customers created without one."""

    DAILY = "daily"
    MONTHLY = "monthly"


class Settings(BaseSettings):
    """Application settings merged from JSON and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./tiffin.db"
    redis_url: str = "redis://localhost:6379/0"
    app_env: str = "dev"
    log_level: str = "INFO"
    menu_cache_ttl: int = 60
    default_daily_amount: float = 300
    default_subscription_type: DefaultSubscription = DefaultSubscription.DAILY
    auto_create_schema: bool = True
    error_dsn: str | None = None


# Cached singleton to avoid repeated file reads
@lru_cache
def get_settings() -> Settings:
    """Return merged settings with environment variable precedence.

    The configuration is read from ``config.json`` located alongside this file
    and fed into :class:`Settings`. Environment variables override any values
    from the JSON file. The result is cached to prevent repeated disk reads.
    """

    config_path = Path(__file__).with_name("config.json")
    data = json.loads(config_path.read_text()) if config_path.exists() else {}
    env_override = {
        k.lower(): v
        for k, v in os.environ.items()
        if k.lower() in Settings.model_fields
    }
    merged = {**data, **env_override}
    return Settings(**merged)
