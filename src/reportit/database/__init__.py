"""Persistence for accounts, categories, transactions, settings and rates."""

from reportit.database.base import Database
from reportit.database.factories import create_sqlite_database
from reportit.database.sqlalchemy_db import SQLAlchemyDatabase

__all__ = ["Database", "SQLAlchemyDatabase", "create_sqlite_database"]
