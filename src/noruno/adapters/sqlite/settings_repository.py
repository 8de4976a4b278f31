"""SQLite implementation of the settings repository.

Settings live in a key/value table; mail settings are a JSON document under
the ``mail_settings`` key.
"""

from __future__ import annotations

import sqlite3

from pydantic import ValidationError

from noruno.adapters.sqlite.connection import get_connection
from noruno.models import MailSettings
from noruno.models.exceptions import PersistenceError
from noruno.repositories import SettingsRepository
from noruno.utils.logger import get_logger

logger = get_logger(__name__)

MAIL_SETTINGS_KEY = "mail_settings"


class SqliteSettingsRepository(SettingsRepository):
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def load(self) -> MailSettings:
        try:
            row = self.connection.execute(
                "SELECT value FROM settings WHERE key = ?", (MAIL_SETTINGS_KEY,)
            ).fetchone()
            if row is None:
                return MailSettings()
            return MailSettings.model_validate_json(row["value"])
        except (sqlite3.Error, ValidationError) as e:
            logger.error("Failed to load mail settings: %s", e)
            raise PersistenceError(f"Failed to load mail settings: {e}") from e

    async def save(self, settings: MailSettings) -> None:
        try:
            with self.connection:
                self.connection.execute(
                    """INSERT INTO settings (key, value) VALUES (?, ?)
                       ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                    (MAIL_SETTINGS_KEY, settings.model_dump_json()),
                )
        except sqlite3.Error as e:
            logger.error("Failed to save mail settings: %s", e)
            raise PersistenceError(f"Failed to save mail settings: {e}") from e
