"""Utilities for SQLite database operations."""

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Sequence

from ......core.exceptions import DuplicateResourceError, StorageError

logger = logging.getLogger(__name__)


class SqliteDatabase:
    """
    Thin wrapper around a SQLite database file.

    A connection is opened per operation and closed afterwards. Driver errors
    are wrapped in StorageError; constraint violations are reported as
    DuplicateResourceError.

    Attributes:
        db_path (str): Path to the database file
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """
        Open a connection, committing on success and rolling back on error.

        Raises:
            DuplicateResourceError: If a uniqueness constraint is violated
            StorageError: If any other database operation fails
        """
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            logger.error(f"Failed to open database {self.db_path}: {str(e)}")
            raise StorageError(f"Failed to open database: {str(e)}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            raise DuplicateResourceError(f"Constraint violated: {str(e)}") from e
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database operation failed: {str(e)}")
            raise StorageError(f"Database operation failed: {str(e)}") from e
        finally:
            conn.close()

    def execute(self, query: str, params: Sequence[Any] = ()) -> int:
        """Execute a statement and return the number of affected rows."""
        with self.connection() as conn:
            return conn.execute(query, params).rowcount

    def fetch_all(self, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run a query and return the rows as dictionaries."""
        with self.connection() as conn:
            return [dict(row) for row in conn.execute(query, params).fetchall()]


def initialize_table(db_path: str, schema: str) -> None:
    """
    Initialize a table in the SQLite database.

    Args:
        db_path: Path to SQLite database
        schema: SQL schema for table creation

    Raises:
        StorageError: If initialization fails
    """
    try:
        SqliteDatabase(db_path).execute(schema)
    except StorageError as e:
        logger.error(f"Failed to initialize table: {str(e)}")
        raise StorageError(f"Failed to initialize table: {str(e)}") from e


def backup_database(source_path: str, backup_dir: str, filename: str) -> str:
    """
    Create a backup of SQLite database.

    Uses SQLite's built-in backup functionality for atomic backups.

    Args:
        source_path: Path to source database
        backup_dir: Directory to store backup
        filename: Name of backup file

    Returns:
        Path of the backup file

    Raises:
        StorageError: If backup fails
    """
    backup_path = os.path.join(backup_dir, filename)
    try:
        os.makedirs(backup_dir, exist_ok=True)
        src = sqlite3.connect(source_path)
        try:
            dst = sqlite3.connect(backup_path)
            try:
                src.backup(dst)
            finally:
                dst.close()
        finally:
            src.close()
    except (sqlite3.Error, OSError) as e:
        logger.error(f"Failed to backup database: {str(e)}")
        raise StorageError(f"Failed to backup database: {str(e)}") from e
    return backup_path
