"""SQLite storage plugin."""

from .repositories import (
    SqliteAnimalRepository,
    SqliteAviaryRepository,
    SqliteCaretakerRepository,
    SqlitePathRepository,
    SqliteRepositories,
)
from .utils import SqliteDatabase, backup_database

__all__ = [
    "SqliteAnimalRepository",
    "SqliteAviaryRepository",
    "SqliteCaretakerRepository",
    "SqliteDatabase",
    "SqlitePathRepository",
    "SqliteRepositories",
    "backup_database",
]
