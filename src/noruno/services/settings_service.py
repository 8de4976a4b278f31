"""Mail settings service."""

from __future__ import annotations

import asyncio

from noruno.models import MailSettings
from noruno.repositories import SettingsRepository
from noruno.utils.logger import get_logger

logger = get_logger(__name__)


class MailSettingsService:
    """Holds the mail settings record behind its own lock."""

    def __init__(self, repository: SettingsRepository):
        self.repository = repository
        self.lock = asyncio.Lock()
        self._settings = MailSettings()

    async def load(self) -> None:
        async with self.lock:
            self._settings = await self.repository.load()

    async def get_settings(self) -> MailSettings:
        async with self.lock:
            return self._settings.model_copy()

    async def save_settings(self, settings: MailSettings) -> MailSettings:
        """Replace and persist the settings."""
        async with self.lock:
            self._settings = settings.model_copy()
            await self.repository.save(self._settings)
            logger.info(
                "Mail settings saved (email=%s, threshold=%d min)",
                settings.email or "<unset>",
                settings.notification_minutes,
            )
            return self._settings.model_copy()
