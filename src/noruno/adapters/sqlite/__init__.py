"""SQLite adapter module - single database file storage implementation."""

from noruno.adapters.sqlite.calendar_repository import SqliteCalendarEventRepository
from noruno.adapters.sqlite.connection import DatabaseConnection, get_connection
from noruno.adapters.sqlite.group_repository import SqliteGroupRepository
from noruno.adapters.sqlite.memo_repository import (
    SqliteFolderRepository,
    SqliteMemoRepository,
)
from noruno.adapters.sqlite.reading_repository import SqliteReadingBookRepository
from noruno.adapters.sqlite.settings_repository import SqliteSettingsRepository
from noruno.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "DatabaseConnection",
    "get_connection",
    "SqliteTaskRepository",
    "SqliteGroupRepository",
    "SqliteSettingsRepository",
    "SqliteMemoRepository",
    "SqliteFolderRepository",
    "SqliteReadingBookRepository",
    "SqliteCalendarEventRepository",
]
