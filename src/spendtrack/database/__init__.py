"""Database layer for spendtrack application."""

from spendtrack.database.base import Database
from spendtrack.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
