import sys

import pytest
from sqlalchemy import Integer, String, inspect, text

from lahmandb.backends import BigQueryBackend, SqlBackend
from lahmandb.backends.bigquery import _default_client_factory
from lahmandb.datasources import FrameSource
from lahmandb.errors import MissingDependencyError


def test_sqlite_backend_copies_tables_with_id_indexes(tmp_path, frames):
    backend = SqlBackend.sqlite(tmp_path / "nested" / "lahman.sqlite")
    engine = backend.connect()
    backend.copy_tables(engine, ["Batting", "People"], FrameSource(frames))

    assert set(backend.list_tables(engine)) == {"Batting", "People"}
    indexed = {tuple(ix["column_names"]) for ix in inspect(engine).get_indexes("Batting")}
    assert indexed == {("playerID",), ("yearID",), ("teamID",)}
    columns = {c["name"]: c["type"] for c in inspect(engine).get_columns("Batting")}
    # text ID columns are bounded so MySQL can index them
    assert isinstance(columns["playerID"], String) and columns["playerID"].length == 255
    assert isinstance(columns["teamID"], String) and columns["teamID"].length == 255
    assert isinstance(columns["yearID"], Integer)
    assert (tmp_path / "nested" / "lahman.sqlite").exists()


def test_sqlite_backend_without_indexes(tmp_path, frames):
    backend = SqlBackend.sqlite(tmp_path / "lahman.sqlite")
    engine = backend.connect()
    backend.copy_tables(engine, ["People"], FrameSource(frames), index=False)
    assert inspect(engine).get_indexes("People") == []


def test_sql_backend_passes_connection_params_through():
    backend = SqlBackend.postgres("stats", host="db.internal", port=5433, username="fan")
    assert backend.name == "postgres"
    assert backend.url.drivername == "postgresql+psycopg2"
    assert backend.url.database == "stats"
    assert backend.url.host == "db.internal"
    assert backend.url.port == 5433
    assert backend.url.username == "fan"

    mysql = SqlBackend.mysql(url="mysql+pymysql://u:p@h/lahman")
    assert mysql.name == "mysql"
    assert mysql.url == "mysql+pymysql://u:p@h/lahman"


def test_sql_backend_missing_driver(monkeypatch):
    def fake_create_engine(url, pool_pre_ping):  # noqa: ARG001
        raise ModuleNotFoundError("No module named 'psycopg2'", name="psycopg2")

    monkeypatch.setattr("lahmandb.backends.sql.create_engine", fake_create_engine)

    with pytest.raises(MissingDependencyError) as excinfo:
        SqlBackend.postgres(host="localhost").connect()
    assert excinfo.value.package == "psycopg2"
    assert excinfo.value.extra == "postgres"
    assert isinstance(excinfo.value, ImportError)


def test_bigquery_backend_submits_all_jobs_before_waiting(bq_client, frames):
    backend = BigQueryBackend(project="stats-proj", client_factory=lambda project: bq_client)
    handle = backend.connect()
    assert handle.dataset_id == "stats-proj.lahman"

    backend.copy_tables(handle, ["Batting", "People"], FrameSource(frames))

    assert bq_client.events == [
        ("create_dataset", "stats-proj.lahman"),
        ("load", "stats-proj.lahman.Batting"),
        ("load", "stats-proj.lahman.People"),
        ("result", "stats-proj.lahman.Batting"),
        ("result", "stats-proj.lahman.People"),
    ]
    assert backend.list_tables(handle) == ["Batting", "People"]


def test_bigquery_backend_bills_to_billing_project(bq_client):
    billed = []

    def factory(project):
        billed.append(project)
        return bq_client

    handle = BigQueryBackend(dataset="mlb", billing="billing-proj", client_factory=factory).connect()
    assert billed == ["billing-proj"]
    # project falls back to the client's own project
    assert handle.dataset_id == "fake-project.mlb"


def test_bigquery_upload_errors_propagate(bq_client, frames):
    class FailingJob:
        def result(self):
            raise RuntimeError("quota exceeded")

    bq_client.load_table_from_dataframe = lambda df, table_id: FailingJob()
    backend = BigQueryBackend(project="p", client_factory=lambda project: bq_client)
    handle = backend.connect()
    with pytest.raises(RuntimeError, match="quota exceeded"):
        backend.copy_tables(handle, ["Batting"], FrameSource(frames))


def test_bigquery_missing_client_library(monkeypatch):
    monkeypatch.setitem(sys.modules, "google.cloud.bigquery", None)
    with pytest.raises(MissingDependencyError, match="google-cloud-bigquery"):
        _default_client_factory("p")


def test_sqlite_backend_drops_table_when_indexing_fails(tmp_path, frames):
    backend = SqlBackend.sqlite(tmp_path / "lahman.sqlite")
    engine = backend.connect()
    with engine.begin() as conn:
        conn.execute(text('CREATE TABLE "Other" ("playerID" TEXT)'))
        conn.execute(text('CREATE INDEX "Batting_playerID" ON "Other" ("playerID")'))

    with pytest.raises(Exception, match="already exists"):
        backend.copy_table(engine, "Batting", frames["Batting"])
    assert "Batting" not in backend.list_tables(engine)
