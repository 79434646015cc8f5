from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Article Board"
    app_version: str = "0.1.0"
    app_env: str = "development"

    # Database. DEFAULT_CONNECTION is either a SQLAlchemy URL
    # (sqlite:///board.db, mssql+pyodbc://...) or a raw ODBC connection string.
    database_provider: Literal["sqlite", "sqlserver"] = "sqlite"
    default_connection: str = ""
    multi_tenant: bool = False
    # Added to raw SqlClient strings (e.g. from dbo.Tenants) that name no Driver.
    odbc_driver: str = "ODBC Driver 18 for SQL Server"

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_bootstrap: str = "INFO"        # Articles table builders

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
