"""Generic SQLite implementation of CollectionRepository.

Concrete repositories only declare their model, table and column mapping;
row conversion, upserts and full-collection replacement live here.
"""

from __future__ import annotations

import sqlite3
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel

from noruno.adapters.sqlite.connection import get_connection
from noruno.adapters.sqlite.utils import (
    build_upsert,
    dump_json_column,
    load_json_column,
    row_to_dict,
)
from noruno.models.exceptions import PersistenceError
from noruno.repositories import CollectionRepository
from noruno.utils.logger import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class SqliteCollectionRepository(CollectionRepository[M]):
    """SQLite repository storing one model per row.

    Class attributes:
        model: Pydantic model class of the stored entity
        table: Table name
        columns: Column names, in table order ("id" first)
        json_columns: Columns holding embedded lists as JSON text
        column_names: Field-to-column renames (for reserved words)
    """

    model: ClassVar[type[BaseModel]]
    table: ClassVar[str]
    columns: ClassVar[list[str]]
    json_columns: ClassVar[frozenset[str]] = frozenset()
    column_names: ClassVar[dict[str, str]] = {}

    def __init__(self, db_path: str | None = None):
        """Initialize repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def _field_for(self, column: str) -> str:
        for field, col in self.column_names.items():
            if col == column:
                return field
        return column

    def _to_row(self, entity: M) -> tuple[Any, ...]:
        data = entity.model_dump(mode="json")
        values = []
        for column in self.columns:
            value = data[self._field_for(column)]
            if column in self.json_columns:
                value = dump_json_column(value)
            values.append(value)
        return tuple(values)

    def _from_row(self, row: sqlite3.Row) -> M:
        data = {}
        for column, value in row_to_dict(row).items():
            if column in self.json_columns:
                value = load_json_column(value)
            data[self._field_for(column)] = value
        return self.model.model_validate(data)

    async def load_all(self) -> list[M]:
        try:
            cursor = self.connection.execute(
                f"SELECT {', '.join(self.columns)} FROM {self.table} ORDER BY rowid"
            )
            return [self._from_row(row) for row in cursor.fetchall()]
        except (sqlite3.Error, ValueError) as e:
            logger.error("Failed to load %s: %s", self.table, e)
            raise PersistenceError(f"Failed to load {self.table}: {e}") from e

    async def save(self, entity: M) -> None:
        sql = build_upsert(self.table, self.columns)
        try:
            with self.connection:
                self.connection.execute(sql, self._to_row(entity))
        except sqlite3.Error as e:
            logger.error("Failed to save %s row: %s", self.table, e)
            raise PersistenceError(f"Failed to save {self.table} row: {e}") from e

    async def save_all(self, entities: list[M]) -> None:
        sql = build_upsert(self.table, self.columns)
        keep = {str(getattr(entity, "id")) for entity in entities}
        try:
            with self.connection:
                self.connection.executemany(sql, [self._to_row(e) for e in entities])
                stored = self.connection.execute(f"SELECT id FROM {self.table}")
                stale = [(row[0],) for row in stored.fetchall() if str(row[0]) not in keep]
                self.connection.executemany(
                    f"DELETE FROM {self.table} WHERE id = ?", stale
                )
        except sqlite3.Error as e:
            logger.error("Failed to save %s: %s", self.table, e)
            raise PersistenceError(f"Failed to save {self.table}: {e}") from e

    async def delete(self, entity_id: int | str) -> None:
        try:
            with self.connection:
                self.connection.execute(
                    f"DELETE FROM {self.table} WHERE id = ?", (entity_id,)
                )
        except sqlite3.Error as e:
            logger.error("Failed to delete %s row %s: %s", self.table, entity_id, e)
            raise PersistenceError(
                f"Failed to delete {self.table} row {entity_id}: {e}"
            ) from e
