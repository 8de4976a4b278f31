"""Services module for Noruno - Business logic layer."""

from .app_context import AppContext, create_app_context
from .calendar_service import CalendarService
from .collection import EntityCollection
from .folder_service import FolderService
from .group_service import GroupService
from .mail_service import MailSender, SmtpMailSender, send_test_email
from .memo_service import MemoService
from .notification_service import (
    NotificationReport,
    NotificationScheduler,
    NotificationService,
)
from .reading_service import ReadingService
from .settings_service import MailSettingsService
from .task_service import TaskService

__all__ = [
    "AppContext",
    "create_app_context",
    "EntityCollection",
    "TaskService",
    "GroupService",
    "MemoService",
    "FolderService",
    "ReadingService",
    "CalendarService",
    "MailSettingsService",
    "MailSender",
    "SmtpMailSender",
    "send_test_email",
    "NotificationService",
    "NotificationReport",
    "NotificationScheduler",
]
