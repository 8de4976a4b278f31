"""SQLite implementation of the task group repository."""

from __future__ import annotations

import sqlite3

from noruno.adapters.sqlite.connection import get_connection
from noruno.models.exceptions import PersistenceError
from noruno.repositories import GroupRepository
from noruno.utils.logger import get_logger

logger = get_logger(__name__)


class SqliteGroupRepository(GroupRepository):
    """Stores group names with their position to keep creation order."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def load_all(self) -> list[str]:
        try:
            cursor = self.connection.execute(
                "SELECT name FROM groups ORDER BY position"
            )
            return [row["name"] for row in cursor.fetchall()]
        except sqlite3.Error as e:
            logger.error("Failed to load groups: %s", e)
            raise PersistenceError(f"Failed to load groups: {e}") from e

    async def save_all(self, names: list[str]) -> None:
        try:
            with self.connection:
                self.connection.execute("DELETE FROM groups")
                self.connection.executemany(
                    "INSERT INTO groups (name, position) VALUES (?, ?)",
                    [(name, position) for position, name in enumerate(names)],
                )
        except sqlite3.Error as e:
            logger.error("Failed to save groups: %s", e)
            raise PersistenceError(f"Failed to save groups: {e}") from e
