from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


class ConfigError(Exception):
    """Raised when required configuration is missing."""


@dataclass(frozen=True)
class Settings:
    database_url: str
    db_pool_min_size: int
    db_pool_max_size: int
    migrations_dir: Path
    log_level: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid integer env value %s='%s', using default=%s", name, value, default)
        return default


@lru_cache
def get_settings() -> Settings:
    # Values already present in the environment win over .env entries.
    load_dotenv(os.path.join(os.getcwd(), ".env"))
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise ConfigError("DATABASE_URL is not set")

    return Settings(
        database_url=database_url,
        db_pool_min_size=_int_env("DB_POOL_MIN_SIZE", 1),
        db_pool_max_size=_int_env("DB_POOL_MAX_SIZE", 5),
        migrations_dir=Path(os.getenv("MIGRATIONS_DIR", "./migrations")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
