from typing import List, Protocol

import pandas as pd


class DatasetSource(Protocol):
    """Protocol for dataset sources exposing named tables as pandas DataFrames."""

    def tables(self) -> List[str]: ...

    def load(self, name: str) -> pd.DataFrame: ...


def required_tables(source: DatasetSource) -> List[str]:
    """All data tables of `source`, leaving out documentation/label tables."""
    return [t for t in source.tables() if "Labels" not in t]
