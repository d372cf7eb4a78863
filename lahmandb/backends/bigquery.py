from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..datasources.base import DatasetSource
from ..errors import MissingDependencyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BigQueryHandle:
    """A BigQuery client together with the dataset the Lahman tables live in."""

    client: Any
    project: str
    dataset: str

    @property
    def dataset_id(self) -> str:
        return f"{self.project}.{self.dataset}"

    def table_id(self, table: str) -> str:
        return f"{self.dataset_id}.{table}"


def _default_client_factory(project: Optional[str]) -> Any:
    try:
        bigquery = importlib.import_module("google.cloud.bigquery")
    except ImportError as e:
        raise MissingDependencyError("google-cloud-bigquery", extra="bigquery") from e
    return bigquery.Client(project=project)


class BigQueryBackend:
    """Destination dataset in Google BigQuery.

    Uploads run as BigQuery load jobs: every missing table is submitted
    first, then the jobs are waited on one at a time in submission order.
    BigQuery has no secondary indexes, so `index` is accepted and ignored.
    """

    name = "bigquery"

    def __init__(
        self,
        project: Optional[str] = None,
        dataset: str = "lahman",
        billing: Optional[str] = None,
        client_factory: Optional[Callable[[Optional[str]], Any]] = None,
    ) -> None:
        self.project = project
        self.dataset = dataset
        self.billing = billing
        self.client_factory = client_factory or _default_client_factory

    def _handle(self) -> BigQueryHandle:
        client = self.client_factory(self.billing or self.project)
        return BigQueryHandle(client=client, project=self.project or client.project, dataset=self.dataset)

    def connect(self) -> BigQueryHandle:
        handle = self._handle()
        handle.client.create_dataset(handle.dataset_id, exists_ok=True)
        return handle

    def ping(self) -> None:
        handle = self._handle()
        handle.client.get_dataset(handle.dataset_id)

    def list_tables(self, handle: BigQueryHandle) -> List[str]:
        return [t.table_id for t in handle.client.list_tables(handle.dataset_id)]

    def copy_tables(
        self,
        handle: BigQueryHandle,
        tables: List[str],
        source: DatasetSource,
        index: bool = True,
        quiet: bool = False,
    ) -> None:
        jobs: Dict[str, Any] = {}
        for table in tables:
            df = source.load(table)
            if not quiet:
                logger.info("Creating table %s", table)
            jobs[table] = handle.client.load_table_from_dataframe(df, handle.table_id(table))

        for table, job in jobs.items():
            if not quiet:
                logger.info("Waiting for %s", table)
            job.result()
