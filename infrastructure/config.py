import logging
import os
from dataclasses import dataclass
from typing import Mapping

from core.domain.errors import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite:///tasks.db"
DEFAULT_MAX_CONNECTIONS = 8
DEFAULT_STALE_TIMEOUT = 300.0
DEFAULT_LOG_LEVEL = "info"
# Names understood by both logging and uvicorn
LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@dataclass(frozen=True, slots=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    max_connections: int = DEFAULT_MAX_CONNECTIONS
    stale_timeout: float = DEFAULT_STALE_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def _parse(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from exc


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """
    Build the settings once at process start.

    Reads from `env` (defaults to os.environ; call load_dotenv() first to pick
    up a .env file). Raises ConfigurationError on malformed values.
    """
    env = os.environ if env is None else env

    database_url = env.get("DATABASE_URL", DEFAULT_DATABASE_URL).strip()
    if not database_url:
        raise ConfigurationError("DATABASE_URL cannot be empty")

    max_connections = _parse(env, "DB_MAX_CONNECTIONS", DEFAULT_MAX_CONNECTIONS, int)
    if max_connections < 1:
        raise ConfigurationError("DB_MAX_CONNECTIONS must be at least 1")

    log_level = env.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().lower() or DEFAULT_LOG_LEVEL
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(
            f"Invalid value for LOG_LEVEL: {log_level!r}, expected one of {', '.join(LOG_LEVELS)}"
        )

    return Settings(
        database_url=database_url,
        max_connections=max_connections,
        stale_timeout=_parse(env, "DB_STALE_TIMEOUT", DEFAULT_STALE_TIMEOUT, float),
        log_level=log_level,
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
