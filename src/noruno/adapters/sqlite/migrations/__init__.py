"""Database migration system for the SQLite store."""

from .m001_initial_schema import ALL_MIGRATIONS, InitialSchemaMigration
from .runner import Migration, MigrationRunner

__all__ = [
    "ALL_MIGRATIONS",
    "InitialSchemaMigration",
    "Migration",
    "MigrationRunner",
]
