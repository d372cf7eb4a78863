import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd
from sqlalchemy import Index, MetaData, String, Table, create_engine, inspect
from sqlalchemy.engine import URL, Engine, make_url

from ..datasources.base import DatasetSource
from ..errors import MissingDependencyError
from ..utils import id_columns

logger = logging.getLogger(__name__)

# Drivers SQLAlchemy needs per dialect, with the lahmandb extra that pulls them in.
DRIVERS: Dict[str, tuple] = {
    "postgresql": ("psycopg2", "postgres"),
    "mysql": ("pymysql", "mysql"),
}

# MySQL cannot index TEXT columns without a key length.
ID_VARCHAR_LENGTH = 255


class SqlBackend:
    """SQLAlchemy-backed destination for SQLite, PostgreSQL and MySQL."""

    def __init__(self, name: str, url: Union[str, URL]) -> None:
        self.name = name
        self.url = url
        self._engine: Optional[Engine] = None

    @classmethod
    def sqlite(cls, path: Union[str, Path]) -> "SqlBackend":
        return cls("sqlite", URL.create("sqlite", database=str(path)))

    @classmethod
    def postgres(cls, dbname: str = "lahman", url: Optional[str] = None, **params) -> "SqlBackend":
        return cls("postgres", url or URL.create("postgresql+psycopg2", database=dbname, **params))

    @classmethod
    def mysql(cls, dbname: str = "lahman", url: Optional[str] = None, **params) -> "SqlBackend":
        return cls("mysql", url or URL.create("mysql+pymysql", database=dbname, **params))

    # ---- Connection ----
    def engine(self) -> Engine:
        if self._engine is None:
            try:
                self._engine = create_engine(self.url, pool_pre_ping=True)
            except ImportError as e:
                backend = make_url(self.url).get_backend_name()
                package, extra = DRIVERS.get(backend, (e.name or backend, None))
                raise MissingDependencyError(package, extra=extra) from e
        return self._engine

    def connect(self) -> Engine:
        engine = self.engine()
        database = engine.url.database
        if engine.url.get_backend_name() == "sqlite" and database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        return engine

    def ping(self) -> None:
        engine = self.engine()
        try:
            with engine.connect():
                pass
        finally:
            engine.dispose()

    # ---- Tables ----
    def list_tables(self, handle: Engine) -> List[str]:
        return inspect(handle).get_table_names()

    def copy_table(self, handle: Engine, name: str, df: pd.DataFrame, index: bool = True) -> None:
        ids = id_columns(df) if index else []
        dtype = {c: String(ID_VARCHAR_LENGTH) for c in ids if pd.api.types.is_object_dtype(df[c])}
        df.to_sql(name, handle, index=False, if_exists="fail", dtype=dtype or None)
        if not ids:
            return
        table = Table(name, MetaData(), autoload_with=handle)
        try:
            with handle.begin() as conn:
                for col in ids:
                    Index(f"{name}_{col}", table.c[col]).create(conn)
        except Exception:
            # a table without its indexes would count as present on the next run
            table.drop(handle, checkfirst=True)
            raise

    def copy_tables(
        self,
        handle: Engine,
        tables: List[str],
        source: DatasetSource,
        index: bool = True,
        quiet: bool = False,
    ) -> None:
        for table in tables:
            df = source.load(table)
            if not quiet:
                logger.info("Creating table %s", table)
            self.copy_table(handle, table, df, index=index)
