"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from fintrack.database.sqlalchemy_db import SQLAlchemyDatabase

DEFAULT_DB_PATH = Path.home() / ".fintrack" / "fintrack.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Resolution order: the explicit path, then FINTRACK_DB_PATH, then
    ~/.fintrack/fintrack.db. A leading ~ is expanded and the parent
    directory is created when missing.

    Raises:
        UpstreamUnavailable: If the database cannot be opened
    """
    database_path = database_path or os.environ.get("FINTRACK_DB_PATH")
    path = Path(database_path).expanduser() if database_path else DEFAULT_DB_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
