"""
Strategy Pattern: Storage Strategy

A strategy bundles every repository implementation for one storage backend.
One strategy is created at startup from configuration and handed to the
services, which never know which backend they are using.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from noruno.models.calendar import CalendarEvent
from noruno.models.config_models import StorageConfig
from noruno.models.memo import Folder, Memo
from noruno.models.reading import ReadingBook
from noruno.models.task import Task
from noruno.repositories import (
    CollectionRepository,
    GroupRepository,
    SettingsRepository,
)


class StorageStrategy(ABC):
    """Abstract base class for storage strategies."""

    @abstractmethod
    def get_task_repository(self) -> CollectionRepository[Task]:
        """Get task repository implementation for this strategy."""

    @abstractmethod
    def get_group_repository(self) -> GroupRepository:
        """Get group repository implementation for this strategy."""

    @abstractmethod
    def get_settings_repository(self) -> SettingsRepository:
        """Get mail settings repository implementation for this strategy."""

    @abstractmethod
    def get_memo_repository(self) -> CollectionRepository[Memo]:
        """Get memo repository implementation for this strategy."""

    @abstractmethod
    def get_folder_repository(self) -> CollectionRepository[Folder]:
        """Get folder repository implementation for this strategy."""

    @abstractmethod
    def get_reading_repository(self) -> CollectionRepository[ReadingBook]:
        """Get reading log repository implementation for this strategy."""

    @abstractmethod
    def get_calendar_repository(self) -> CollectionRepository[CalendarEvent]:
        """Get calendar event repository implementation for this strategy."""

    @property
    @abstractmethod
    def storage_type(self) -> str:
        """Get storage type identifier (for logging/debugging)."""

    def close(self) -> None:
        """Release backend resources."""


class SqliteStorageStrategy(StorageStrategy):
    """All repositories share one SQLite database file."""

    def __init__(self, db_path: str):
        """
        Args:
            db_path: Path to SQLite database file (or ":memory:")
        """
        self.db_path = db_path

        # Import here to avoid circular dependencies
        from noruno.adapters.sqlite import (
            SqliteCalendarEventRepository,
            SqliteFolderRepository,
            SqliteGroupRepository,
            SqliteMemoRepository,
            SqliteReadingBookRepository,
            SqliteSettingsRepository,
            SqliteTaskRepository,
        )

        self._task_repo = SqliteTaskRepository(db_path=db_path)
        self._group_repo = SqliteGroupRepository(db_path=db_path)
        self._settings_repo = SqliteSettingsRepository(db_path=db_path)
        self._memo_repo = SqliteMemoRepository(db_path=db_path)
        self._folder_repo = SqliteFolderRepository(db_path=db_path)
        self._reading_repo = SqliteReadingBookRepository(db_path=db_path)
        self._calendar_repo = SqliteCalendarEventRepository(db_path=db_path)

    def get_task_repository(self) -> CollectionRepository[Task]:
        return self._task_repo

    def get_group_repository(self) -> GroupRepository:
        return self._group_repo

    def get_settings_repository(self) -> SettingsRepository:
        return self._settings_repo

    def get_memo_repository(self) -> CollectionRepository[Memo]:
        return self._memo_repo

    def get_folder_repository(self) -> CollectionRepository[Folder]:
        return self._folder_repo

    def get_reading_repository(self) -> CollectionRepository[ReadingBook]:
        return self._reading_repo

    def get_calendar_repository(self) -> CollectionRepository[CalendarEvent]:
        return self._calendar_repo

    @property
    def storage_type(self) -> str:
        return "sqlite"

    def close(self) -> None:
        from noruno.adapters.sqlite import DatabaseConnection

        if DatabaseConnection.get_db_path() == str(self.db_path):
            DatabaseConnection.close_connection()


class JsonStorageStrategy(StorageStrategy):
    """One JSON document per entity kind in a data directory."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

        from noruno.adapters.json_file import (
            JsonCollectionRepository,
            JsonGroupRepository,
            JsonSettingsRepository,
        )

        self._task_repo = JsonCollectionRepository(self.data_dir / "tasks.json", Task)
        self._group_repo = JsonGroupRepository(self.data_dir / "groups.json")
        self._settings_repo = JsonSettingsRepository(self.data_dir / "settings.json")
        self._memo_repo = JsonCollectionRepository(self.data_dir / "memos.json", Memo)
        self._folder_repo = JsonCollectionRepository(
            self.data_dir / "folders.json", Folder
        )
        self._reading_repo = JsonCollectionRepository(
            self.data_dir / "reading_books.json", ReadingBook
        )
        self._calendar_repo = JsonCollectionRepository(
            self.data_dir / "calendar_events.json", CalendarEvent
        )

    def get_task_repository(self) -> CollectionRepository[Task]:
        return self._task_repo

    def get_group_repository(self) -> GroupRepository:
        return self._group_repo

    def get_settings_repository(self) -> SettingsRepository:
        return self._settings_repo

    def get_memo_repository(self) -> CollectionRepository[Memo]:
        return self._memo_repo

    def get_folder_repository(self) -> CollectionRepository[Folder]:
        return self._folder_repo

    def get_reading_repository(self) -> CollectionRepository[ReadingBook]:
        return self._reading_repo

    def get_calendar_repository(self) -> CollectionRepository[CalendarEvent]:
        return self._calendar_repo

    @property
    def storage_type(self) -> str:
        return "json"


def create_storage_strategy(config: StorageConfig, data_dir: str | Path) -> StorageStrategy:
    """Build the strategy selected by configuration.

    Args:
        config: Storage section of the application config
        data_dir: Resolved data directory
    """
    if config.backend == "json":
        return JsonStorageStrategy(data_dir)
    return SqliteStorageStrategy(str(Path(data_dir) / "noruno.db"))
