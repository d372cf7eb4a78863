from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
from sqlalchemy.engine import Engine

from .backends import BACKENDS, Backend, BigQueryBackend, BigQueryHandle, SqlBackend
from .config import Settings, get_settings
from .datasources import DatasetSource, default_source, required_tables
from .errors import UnknownBackendError
from .utils import db_location, succeeds

logger = logging.getLogger(__name__)


class LahmanRepository:
    """Caches the Lahman tables into a backend and hands out one handle per backend.

    Handles are kept for the life of the repository. A handle is only cached
    once every required table is present at its destination.
    """

    def __init__(
        self,
        source: Optional[DatasetSource] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.source = source or default_source(self.settings)
        self._handles: Dict[str, Any] = {}

    # ---- Handle cache ----
    def cached(self, backend: str) -> Optional[Any]:
        return self._handles.get(backend)

    def clear(self) -> None:
        self._handles.clear()

    def _get_or_create(self, make_backend: Callable[[], Backend], quiet: Optional[bool]) -> Any:
        backend = make_backend()
        handle = backend.connect()
        self.populate(backend, handle, quiet=quiet)
        self._handles[backend.name] = handle
        return handle

    # ---- Table sync ----
    def missing_tables(self, backend: Backend, handle: Any) -> List[str]:
        # servers such as MySQL with lower_case_table_names report folded names
        present = {t.lower() for t in backend.list_tables(handle)}
        return [t for t in required_tables(self.source) if t.lower() not in present]

    def populate(self, backend: Backend, handle: Any, quiet: Optional[bool] = None) -> List[str]:
        """Copy every required table the destination lacks; returns the tables copied."""
        quiet = self.settings.quiet if quiet is None else quiet
        missing = self.missing_tables(backend, handle)
        if missing:
            backend.copy_tables(handle, missing, self.source, index=self.settings.create_indexes, quiet=quiet)
        return missing

    # ---- Backend construction ----
    def _postgres_backend(self, dbname: str = "lahman", url: Optional[str] = None, **params) -> SqlBackend:
        if url is None and not params and dbname == "lahman":
            url = self.settings.postgres_url
        return SqlBackend.postgres(dbname, url=url, **params)

    def _mysql_backend(self, dbname: str = "lahman", url: Optional[str] = None, **params) -> SqlBackend:
        if url is None and not params and dbname == "lahman":
            url = self.settings.mysql_url
        return SqlBackend.mysql(dbname, url=url, **params)

    def _bigquery_backend(
        self,
        project: Optional[str] = None,
        dataset: Optional[str] = None,
        billing: Optional[str] = None,
        client_factory: Optional[Callable[[Optional[str]], Any]] = None,
    ) -> BigQueryBackend:
        return BigQueryBackend(
            project=project or self.settings.bigquery_project,
            dataset=dataset or self.settings.bigquery_dataset,
            billing=billing or self.settings.bigquery_billing,
            client_factory=client_factory,
        )

    # ---- Accessors ----
    def sqlite(self, path: Optional[str] = None, quiet: Optional[bool] = None) -> Engine:
        """SQLite engine on the cached database file.

        The file is created before the tables are copied, so a failed first run
        (e.g. pybaseball not installed) leaves an empty file behind; the next
        call fills in the missing tables.
        """
        if "sqlite" in self._handles:
            return self._handles["sqlite"]

        location = db_location(path or self.settings.sqlite_path)
        if not location.exists():
            logger.info("Caching Lahman db at %s", location)
        return self._get_or_create(lambda: SqlBackend.sqlite(location), quiet)

    def postgres(self, dbname: str = "lahman", url: Optional[str] = None, quiet: Optional[bool] = None, **params) -> Engine:
        if "postgres" in self._handles:
            return self._handles["postgres"]
        return self._get_or_create(lambda: self._postgres_backend(dbname, url=url, **params), quiet)

    def mysql(self, dbname: str = "lahman", url: Optional[str] = None, quiet: Optional[bool] = None, **params) -> Engine:
        if "mysql" in self._handles:
            return self._handles["mysql"]
        return self._get_or_create(lambda: self._mysql_backend(dbname, url=url, **params), quiet)

    def bigquery(
        self,
        project: Optional[str] = None,
        dataset: Optional[str] = None,
        billing: Optional[str] = None,
        quiet: Optional[bool] = None,
        client_factory: Optional[Callable[[Optional[str]], Any]] = None,
    ) -> BigQueryHandle:
        if "bigquery" in self._handles:
            return self._handles["bigquery"]
        return self._get_or_create(
            lambda: self._bigquery_backend(project, dataset, billing, client_factory=client_factory), quiet
        )

    # ---- Reachability ----
    def has(self, backend: str) -> bool:
        """Whether `backend` is available with default parameters; never raises for known names.

        For sqlite this only checks that the database file exists, not that it
        holds every table.
        """
        if backend not in BACKENDS:
            raise UnknownBackendError(backend)
        if backend == "sqlite":
            return db_location(self.settings.sqlite_path).exists()
        if backend == "postgres":
            return succeeds(lambda: self._postgres_backend().ping())
        if backend == "mysql":
            return succeeds(lambda: self._mysql_backend().ping())
        return succeeds(lambda: self._bigquery_backend().ping())

    # ---- Reading ----
    def read_table(self, handle: Any, name: str) -> pd.DataFrame:
        return read_table(handle, name)


def read_table(handle: Any, name: str) -> pd.DataFrame:
    """Read a whole cached table from any handle the accessors return."""
    if isinstance(handle, BigQueryHandle):
        return handle.client.list_rows(handle.table_id(name)).to_dataframe()
    return pd.read_sql_table(name, handle)
