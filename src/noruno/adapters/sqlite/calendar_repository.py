"""SQLite implementation of the calendar event repository."""

from __future__ import annotations

from noruno.adapters.sqlite.base_repository import SqliteCollectionRepository
from noruno.models import CalendarEvent


class SqliteCalendarEventRepository(SqliteCollectionRepository[CalendarEvent]):
    model = CalendarEvent
    table = "calendar_events"
    columns = [
        "id",
        "title",
        "description",
        "start_datetime",
        "end_datetime",
        "all_day",
        "color",
        "recurrence_rule",
        "reminder_minutes",
        "created_at",
        "updated_at",
    ]
