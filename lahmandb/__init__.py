"""Cache the Lahman baseball database into SQLite, PostgreSQL, MySQL or BigQuery.

    >>> from lahmandb import lahman_sqlite, read_table
    >>> batting = read_table(lahman_sqlite(), "Batting")
"""
import logging

from .config import Settings, get_settings
from .errors import LahmanError, MissingDependencyError, UnknownBackendError, UnknownTableError
from .lahman import (
    get_repository,
    has_lahman,
    lahman_bigquery,
    lahman_mysql,
    lahman_postgres,
    lahman_sqlite,
    read_table,
    set_repository,
)
from .repository import LahmanRepository
from .utils import configure_logging, db_location

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Settings",
    "get_settings",
    "LahmanRepository",
    "get_repository",
    "set_repository",
    "lahman_sqlite",
    "lahman_postgres",
    "lahman_mysql",
    "lahman_bigquery",
    "has_lahman",
    "read_table",
    "db_location",
    "configure_logging",
    "LahmanError",
    "MissingDependencyError",
    "UnknownBackendError",
    "UnknownTableError",
]
