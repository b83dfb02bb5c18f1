import logging

from peewee import Database
from playhouse.db_url import connect

from infrastructure.config import Settings

logger = logging.getLogger(__name__)


def create_database(settings: Settings) -> Database:
    """
    Build the peewee database handle described by `settings.database_url`.

    The handle is not opened here; repositories acquire and release a
    connection per operation. `+pool` schemes get a connection pool sized from
    the settings.
    """
    scheme = settings.database_url.split(":", 1)[0].lower()
    params = {}
    if scheme.startswith("sqlite"):
        # task_tags relies on ON DELETE CASCADE
        params["pragmas"] = {"foreign_keys": 1, "journal_mode": "wal"}
    if scheme.endswith("+pool"):
        params["max_connections"] = settings.max_connections
        params["stale_timeout"] = settings.stale_timeout

    database = connect(settings.database_url, **params)
    logger.info(f"Database configured: {type(database).__name__} ({scheme})")
    return database
