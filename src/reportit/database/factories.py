"""Database factory functions."""

import os
from pathlib import Path
from typing import Optional

from reportit.database.sqlalchemy_db import SQLAlchemyDatabase
from reportit.logging_config import get_logger

logger = get_logger(__name__)

DB_PATH_ENV_VAR = "REPORTIT_DB_PATH"

DEFAULT_DB_PATH = Path.home() / ".reportit" / "reportit.db"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the SQLite file: explicit path, then $REPORTIT_DB_PATH, then the default."""
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV_VAR)
    return Path(database_path).expanduser() if database_path else DEFAULT_DB_PATH


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed database, creating its directory if needed.

    Args:
        database_path: Path to the SQLite file (see resolve_database_path)

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = resolve_database_path(database_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("database_opened", path=str(path))
    return SQLAlchemyDatabase(f"sqlite:///{path}")
