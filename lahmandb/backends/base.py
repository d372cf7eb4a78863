from typing import Any, List, Protocol

from ..datasources.base import DatasetSource


class Backend(Protocol):
    """Protocol for a destination store that can hold named tables."""

    name: str

    def connect(self) -> Any: ...

    def list_tables(self, handle: Any) -> List[str]: ...

    def copy_tables(
        self,
        handle: Any,
        tables: List[str],
        source: DatasetSource,
        index: bool = True,
        quiet: bool = False,
    ) -> None: ...

    def ping(self) -> None: ...
