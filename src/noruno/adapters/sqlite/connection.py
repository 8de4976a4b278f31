"""Database connection management for the SQLite store.

This module provides a singleton connection manager for the local SQLite
database, ensuring proper connection lifecycle, WAL mode and schema migration.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from noruno.adapters.sqlite.migrations.m001_initial_schema import ALL_MIGRATIONS
from noruno.adapters.sqlite.migrations.runner import MigrationRunner
from noruno.models.exceptions import PersistenceError
from noruno.utils.logger import get_logger

logger = get_logger(__name__)

DB_FILENAME = "noruno.db"
MEMORY_DB = ":memory:"


def default_db_path() -> Path:
    """Database location under the platform data directory."""
    return Path(user_data_dir("noruno")) / DB_FILENAME


class DatabaseConnection:
    """Singleton connection manager for the SQLite store.

    Provides:
    - Single connection per process (connection reuse)
    - WAL mode for file databases
    - Automatic directory creation
    - Owner-only file permissions
    - Graceful cleanup on exit
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: str | None = None
    _atexit_registered: bool = False

    def __new__(cls) -> DatabaseConnection:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create the database connection.

        Args:
            db_path: Path to database file, or ":memory:". If None, uses the
                default location.

        Returns:
            sqlite3.Connection with the schema migrated to the latest version

        Raises:
            PersistenceError: If the database cannot be opened or migrated
        """
        instance = cls()
        key = str(db_path) if db_path is not None else str(default_db_path())

        if instance._connection is not None and instance._db_path == key:
            return instance._connection

        if instance._connection is not None:
            cls.close_connection()

        try:
            connection = cls._open(key)
        except (sqlite3.Error, OSError, RuntimeError) as e:
            logger.error("Cannot open database %s: %s", key, e)
            raise PersistenceError(f"Cannot open database {key}: {e}") from e

        instance._connection = connection
        instance._db_path = key

        if not cls._atexit_registered:
            atexit.register(cls.close_connection)
            cls._atexit_registered = True

        return connection

    @classmethod
    def _open(cls, key: str) -> sqlite3.Connection:
        is_memory = key == MEMORY_DB
        is_new_database = False
        if not is_memory:
            path = Path(key)
            path.parent.mkdir(parents=True, exist_ok=True)
            is_new_database = not path.exists()

        connection = sqlite3.connect(key, check_same_thread=False, timeout=30.0)
        connection.row_factory = sqlite3.Row
        if not is_memory:
            connection.execute("PRAGMA journal_mode = WAL")

        if is_new_database:
            os.chmod(key, 0o600)
            logger.info("Created database %s", key)

        runner = MigrationRunner(connection)
        runner.run_migrations(ALL_MIGRATIONS)
        return connection

    @classmethod
    def close_connection(cls) -> None:
        """Close database connection gracefully."""
        instance = cls()
        if instance._connection is not None:
            try:
                instance._connection.commit()
                instance._connection.close()
            except sqlite3.Error as e:
                logger.warning("Error closing database: %s", e)
            finally:
                instance._connection = None
                instance._db_path = None

    @classmethod
    def get_db_path(cls) -> str | None:
        """Get current database path."""
        return cls()._db_path


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection."""
    return DatabaseConnection.get_connection(db_path)
