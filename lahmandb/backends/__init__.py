"""Destination backends the Lahman tables are cached into.

Public exports:
- Backend protocol
- SqlBackend (SQLite, PostgreSQL, MySQL)
- BigQueryBackend and its BigQueryHandle
"""
from .base import Backend
from .bigquery import BigQueryBackend, BigQueryHandle
from .sql import SqlBackend

BACKENDS = ("sqlite", "postgres", "mysql", "bigquery")

__all__ = [
    "Backend",
    "SqlBackend",
    "BigQueryBackend",
    "BigQueryHandle",
    "BACKENDS",
]
