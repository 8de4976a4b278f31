"""Application context: storage, collections and services wired together.

One ``AppContext`` is built per process (or per CLI command) and passed
explicitly to whatever needs the services.
"""

from __future__ import annotations

from dataclasses import dataclass

from noruno.models import CalendarEvent, Folder, Memo, ReadingBook, Task
from noruno.models.config_models import AppConfig
from noruno.models.storage_strategy import StorageStrategy, create_storage_strategy
from noruno.services.calendar_service import CalendarService
from noruno.services.collection import EntityCollection
from noruno.services.config_service import resolve_data_dir
from noruno.services.folder_service import FolderService
from noruno.services.group_service import GroupService
from noruno.services.mail_service import MailSender, SmtpMailSender
from noruno.services.memo_service import MemoService
from noruno.services.notification_service import (
    NotificationScheduler,
    NotificationService,
)
from noruno.services.reading_service import ReadingService
from noruno.services.settings_service import MailSettingsService
from noruno.services.task_service import TaskService
from noruno.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class AppContext:
    config: AppConfig
    storage: StorageStrategy
    tasks: TaskService
    groups: GroupService
    memos: MemoService
    folders: FolderService
    reading: ReadingService
    calendar: CalendarService
    mail_settings: MailSettingsService
    notifications: NotificationService
    mail_sender: MailSender

    def scheduler(self) -> NotificationScheduler:
        """Notification scheduler using the configured interval."""
        return NotificationScheduler(
            self.notifications, self.config.notifications.interval_seconds
        )

    def close(self) -> None:
        self.storage.close()


async def create_app_context(
    config: AppConfig,
    mail_sender: MailSender | None = None,
    storage: StorageStrategy | None = None,
) -> AppContext:
    """Build every collection from the configured backend and wire the services.

    Args:
        config: Application configuration
        mail_sender: Outbound mail (defaults to SMTP from ``config.smtp``)
        storage: Storage strategy (defaults to the configured backend)

    Raises:
        PersistenceError: If any collection cannot be loaded
    """
    if storage is None:
        data_dir = resolve_data_dir(config)
        data_dir.mkdir(parents=True, exist_ok=True)
        storage = create_storage_strategy(config.storage, data_dir)
    if mail_sender is None:
        mail_sender = SmtpMailSender.from_config(config.smtp)

    task_collection = EntityCollection[Task]("task", storage.get_task_repository())
    memo_collection = EntityCollection[Memo]("memo", storage.get_memo_repository())
    folder_collection = EntityCollection[Folder](
        "folder", storage.get_folder_repository()
    )
    book_collection = EntityCollection[ReadingBook](
        "book", storage.get_reading_repository()
    )
    event_collection = EntityCollection[CalendarEvent](
        "event", storage.get_calendar_repository()
    )

    mail_settings = MailSettingsService(storage.get_settings_repository())
    context = AppContext(
        config=config,
        storage=storage,
        tasks=TaskService(task_collection),
        groups=GroupService(storage.get_group_repository(), task_collection),
        memos=MemoService(memo_collection),
        folders=FolderService(folder_collection, memo_collection),
        reading=ReadingService(book_collection),
        calendar=CalendarService(event_collection),
        mail_settings=mail_settings,
        notifications=NotificationService(task_collection, mail_settings, mail_sender),
        mail_sender=mail_sender,
    )

    await context.tasks.load()
    await context.groups.load()
    await context.memos.load()
    await context.folders.load()
    await context.reading.load()
    await context.calendar.load()
    await context.mail_settings.load()
    logger.debug("App context ready (%s storage)", storage.storage_type)
    return context
