from typing import Any, Optional

import pandas as pd
from sqlalchemy.engine import Engine

from .backends import BigQueryHandle
from .config import get_settings
from .repository import LahmanRepository, read_table as _read_table

# Process-wide repository, created on first use so settings are read lazily.
_repo: Optional[LahmanRepository] = None


def get_repository() -> LahmanRepository:
    """Get the default LahmanRepository, initializing it on first call."""
    global _repo
    if _repo is None:
        _repo = LahmanRepository(settings=get_settings())
    return _repo


def set_repository(repo: Optional[LahmanRepository]) -> None:
    """Swap the default repository (None resets it to be rebuilt on next use)."""
    global _repo
    _repo = repo


def lahman_sqlite(path: Optional[str] = None) -> Engine:
    """Cache and return an SQLite engine holding the Lahman database.

    If `path` is None the file is stored in the installed package directory,
    or in a temporary directory if that isn't writeable.
    """
    return get_repository().sqlite(path)


def lahman_postgres(dbname: str = "lahman", **params: Any) -> Engine:
    """Cache the Lahman tables into PostgreSQL. The `dbname` database must already exist."""
    return get_repository().postgres(dbname, **params)


def lahman_mysql(dbname: str = "lahman", **params: Any) -> Engine:
    """Cache the Lahman tables into MySQL. The `dbname` database must already exist."""
    return get_repository().mysql(dbname, **params)


def lahman_bigquery(project: Optional[str] = None, quiet: Optional[bool] = None, **params: Any) -> BigQueryHandle:
    return get_repository().bigquery(project, quiet=quiet, **params)


def has_lahman(src: str) -> bool:
    """Whether the Lahman database is reachable in backend `src`."""
    return get_repository().has(src)


def read_table(handle: Any, name: str) -> pd.DataFrame:
    return _read_table(handle, name)
