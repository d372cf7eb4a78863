import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Any, List, Optional

import pandas as pd

from .config import get_settings

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent


def db_location(path: Optional[str] = None, filename: str = "lahman.sqlite") -> Path:
    """Resolve where an embedded database file lives.

    An explicit `path` always wins. Otherwise the file goes in the installed
    package directory if that is writeable, and in the system temporary
    directory if it isn't.
    """
    if path is not None:
        return Path(path).expanduser()

    if os.access(PACKAGE_DIR, os.W_OK):
        return PACKAGE_DIR / filename
    return Path(tempfile.gettempdir()) / filename


def id_columns(df: pd.DataFrame) -> List[str]:
    """Columns that get an index when a table is copied (names ending in `ID`)."""
    return [str(c) for c in df.columns if str(c).endswith("ID")]


def succeeds(fn: Callable[[], Any]) -> bool:
    """Run `fn` and report whether it returned without raising."""
    try:
        fn()
    except Exception as e:  # noqa: BLE001
        logger.debug("Reachability check failed: %s", e)
        return False
    return True


def configure_logging(level: Optional[str | int] = None) -> None:
    """Attach a stream handler to the package logger so progress messages are shown.

    `level` defaults to the LAHMAN_LOG_LEVEL setting.
    """
    if level is None:
        level = get_settings().log_level
    root = logging.getLogger("lahmandb")
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)
