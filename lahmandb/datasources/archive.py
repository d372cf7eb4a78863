import logging
import zipfile
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional

import pandas as pd
import requests

from ..config import Settings, get_settings
from ..errors import UnknownTableError
from ..utils import db_location

logger = logging.getLogger(__name__)


def _preference(member: str) -> tuple:
    # core/ copies beat contrib/ and upstream/ duplicates, then shorter paths win
    parts = PurePosixPath(member).parts
    return ("core" not in parts, len(member), member)


class ArchiveSource:
    """Reads the Lahman CSV release from a local directory or `.zip` archive.

    Every CSV file is one table named after the file stem. When the archive
    is missing and a URL is configured, the zip is downloaded first.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        path: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.path = Path(path or self.settings.archive_path or db_location(None, "lahman-csv.zip"))
        self.url = url if url is not None else self.settings.archive_url
        self._members: Optional[Dict[str, str]] = None

    # ---- Archive discovery ----
    def _ensure_archive(self) -> None:
        if self.path.exists() or not self.url:
            return
        logger.info("Downloading Lahman archive from %s", self.url)
        resp = requests.get(self.url, timeout=120)
        resp.raise_for_status()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(resp.content)

    def _index(self) -> Dict[str, str]:
        if self._members is not None:
            return self._members

        self._ensure_archive()
        if self.path.is_dir():
            names = [p.relative_to(self.path).as_posix() for p in self.path.rglob("*.csv")]
        else:
            with zipfile.ZipFile(self.path) as zf:
                names = [n for n in zf.namelist() if n.lower().endswith(".csv")]

        members: Dict[str, str] = {}
        for name in sorted(names, key=_preference):
            members.setdefault(PurePosixPath(name).stem, name)
        self._members = members
        return members

    # ---- DatasetSource ----
    def tables(self) -> List[str]:
        return sorted(self._index())

    def load(self, name: str) -> pd.DataFrame:
        members = self._index()
        if name not in members:
            raise UnknownTableError(name, str(self.path))
        member = members[name]
        if self.path.is_dir():
            return pd.read_csv(self.path / member)
        with zipfile.ZipFile(self.path) as zf, zf.open(member) as fh:
            return pd.read_csv(fh)
