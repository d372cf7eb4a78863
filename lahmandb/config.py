from pathlib import Path
from typing import Optional, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =========================
# Configuration (ENV-DRIVEN via Pydantic)
# =========================

BASEBALLDATABANK_URL = "https://github.com/chadwickbureau/baseballdatabank/archive/refs/heads/master.zip"


class Settings(BaseSettings):
    """Library settings read from environment and validated by Pydantic.

    Only a single `.env` file at the project root is read. Real environment
    variables always take precedence over `.env` values.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
    )

    # Backends
    sqlite_path: Optional[str] = Field(default=None, alias="LAHMAN_SQLITE_PATH")
    postgres_url: Optional[str] = Field(default=None, alias="LAHMAN_POSTGRES_URL")
    mysql_url: Optional[str] = Field(default=None, alias="LAHMAN_MYSQL_URL")
    bigquery_project: Optional[str] = Field(default=None, alias="LAHMAN_BIGQUERY_PROJECT")
    bigquery_dataset: str = Field(default="lahman", alias="LAHMAN_BIGQUERY_DATASET")
    bigquery_billing: Optional[str] = Field(default=None, alias="LAHMAN_BIGQUERY_BILLING")

    # Dataset source
    dataset_source: Literal["PYBASEBALL", "ARCHIVE"] = Field(default="PYBASEBALL", alias="LAHMAN_DATASET_SOURCE")
    archive_path: Optional[str] = Field(default=None, alias="LAHMAN_ARCHIVE_PATH")
    archive_url: str = Field(default=BASEBALLDATABANK_URL, alias="LAHMAN_ARCHIVE_URL")

    # Copy behaviour
    create_indexes: bool = Field(default=True, alias="LAHMAN_CREATE_INDEXES")
    quiet: bool = Field(default=False, alias="LAHMAN_QUIET")
    log_level: str = Field(default="INFO", alias="LAHMAN_LOG_LEVEL")

    @field_validator("dataset_source", mode="before")
    @classmethod
    def _upper_dataset_source(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v


# Singleton accessor to avoid repeated disk reads/parsing
_settings_singleton: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the singleton Settings instance, initializing it on first call."""
    global _settings_singleton
    if _settings_singleton is None:
        _settings_singleton = Settings()
    return _settings_singleton
