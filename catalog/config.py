"""
Configuration for the catalog service.

Values come from environment variables (a ``.env`` file in the working
directory is loaded first). Every setting has a default so the service
starts with no configuration at all.
"""
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(Exception):
    """Raised when an environment variable holds an unusable value."""
    pass


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _get_int(key: str, default: int, minimum: int = 1) -> int:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"'{key}' must be an integer, got {raw!r}")
    if value < minimum:
        raise ConfigurationError(f"'{key}' must be >= {minimum}, got {value}")
    return value


def _get_bool(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    norm = raw.strip().lower()
    if norm in _TRUE:
        return True
    if norm in _FALSE:
        return False
    raise ConfigurationError(f"'{key}' must be a boolean, got {raw!r}")


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _get_log_level(key: str, default: str) -> str:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"'{key}' must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return level


def _get_list(key: str, default: List[str]) -> List[str]:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return list(default)
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the API and its store."""

    max_records: int = 10000            # store capacity
    new_product_days: int = 30          # age limit for the "new" badge
    seed_data: bool = True              # load demo products at startup
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = "0.0.0.0"
    port: int = 8085
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Build ``Settings`` from the current environment."""
    return Settings(
        max_records=_get_int("CATALOG_MAX_RECORDS", 10000),
        new_product_days=_get_int("CATALOG_NEW_PRODUCT_DAYS", 30, minimum=0),
        seed_data=_get_bool("CATALOG_SEED_DATA", True),
        cors_origins=_get_list("CATALOG_CORS_ORIGINS", ["*"]),
        host=os.environ.get("CATALOG_HOST", "0.0.0.0"),
        port=_get_int("CATALOG_PORT", 8085),
        log_level=_get_log_level("LOG_LEVEL", "INFO"),
    )
