from typing import Dict, List, Mapping

import pandas as pd

from ..errors import UnknownTableError


class FrameSource:
    """Serves tables from an in-memory mapping of table name to DataFrame."""

    def __init__(self, frames: Mapping[str, pd.DataFrame]) -> None:
        self.frames: Dict[str, pd.DataFrame] = dict(frames)

    def tables(self) -> List[str]:
        return list(self.frames)

    def load(self, name: str) -> pd.DataFrame:
        try:
            return self.frames[name].copy()
        except KeyError:
            raise UnknownTableError(name, "FrameSource") from None
