"""Utility functions for SQLite adapter."""

from __future__ import annotations

import json
from typing import Any


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary.

    Args:
        row: sqlite3.Row object

    Returns:
        Dictionary with column names as keys
    """
    if row is None:
        return {}
    return dict(row)


def dump_json_column(value: Any) -> str | None:
    """Serialize an embedded list for a JSON text column (None stays NULL)."""
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)


def load_json_column(value: str | None) -> Any:
    """Parse a JSON text column (NULL becomes None)."""
    if value is None:
        return None
    return json.loads(value)


def build_upsert(table: str, columns: list[str], key: str = "id") -> str:
    """Build an INSERT ... ON CONFLICT DO UPDATE statement.

    Args:
        table: Table name
        columns: All column names, including the key
        key: Conflict target column

    Returns:
        SQL statement with one ``?`` placeholder per column
    """
    placeholders = ", ".join("?" for _ in columns)
    updates = ", ".join(f"{c} = excluded.{c}" for c in columns if c != key)
    return (
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) "
        f"ON CONFLICT({key}) DO UPDATE SET {updates}"
    )
