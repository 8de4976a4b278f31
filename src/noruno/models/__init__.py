"""Noruno domain models.

This package contains Pydantic models that represent the core domain entities
of the application. These models are used throughout the application for
data validation, serialization, and type safety.
"""

from .calendar import CalendarEvent, CalendarEventInput, CalendarEventUpdate
from .config_models import AppConfig
from .memo import Folder, FolderCreate, FolderUpdate, Memo, MemoCreate, MemoUpdate
from .reading import (
    ReadingBook,
    ReadingBookCreate,
    ReadingBookUpdate,
    ReadingNote,
    ReadingNoteInput,
    ReadingSession,
    ReadingSessionInput,
    ReadingStats,
    ReadingStatus,
)
from .settings import MailSettings
from .task import Subtask, SubtaskUpdate, Task, TaskCreate, TaskStats, TaskUpdate

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskStats",
    "Subtask",
    "SubtaskUpdate",
    # Memo models
    "Memo",
    "MemoCreate",
    "MemoUpdate",
    "Folder",
    "FolderCreate",
    "FolderUpdate",
    # Reading models
    "ReadingBook",
    "ReadingBookCreate",
    "ReadingBookUpdate",
    "ReadingNote",
    "ReadingNoteInput",
    "ReadingSession",
    "ReadingSessionInput",
    "ReadingStats",
    "ReadingStatus",
    # Calendar models
    "CalendarEvent",
    "CalendarEventInput",
    "CalendarEventUpdate",
    # Settings / config
    "MailSettings",
    "AppConfig",
]
