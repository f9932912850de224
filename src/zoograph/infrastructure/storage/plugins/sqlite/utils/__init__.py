"""SQLite storage utilities."""

from .persistence import SqliteDatabase, backup_database, initialize_table

__all__ = ["SqliteDatabase", "backup_database", "initialize_table"]
