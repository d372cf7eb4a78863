"""Dataset sources: where the Lahman tables are copied from.

Public exports:
- DatasetSource protocol and required_tables
- PybaseballSource, ArchiveSource, FrameSource
- default_source
"""
from typing import Optional

from ..config import Settings, get_settings
from .archive import ArchiveSource
from .base import DatasetSource, required_tables
from .memory import FrameSource
from .pybaseball_source import LAHMAN_TABLES, PybaseballSource


def default_source(settings: Optional[Settings] = None) -> DatasetSource:
    settings = settings or get_settings()
    if settings.dataset_source == "ARCHIVE":
        return ArchiveSource(settings)
    return PybaseballSource()


__all__ = [
    "DatasetSource",
    "required_tables",
    "PybaseballSource",
    "ArchiveSource",
    "FrameSource",
    "LAHMAN_TABLES",
    "default_source",
]
