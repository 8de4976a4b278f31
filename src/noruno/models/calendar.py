"""Calendar event data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .base import new_id, utc_now


class CalendarEvent(BaseModel):
    """Calendar event.

    The recurrence rule is stored verbatim and never expanded.
    """

    id: str = Field(default_factory=new_id)
    title: str
    description: str = ""
    start_datetime: str
    end_datetime: str | None = None
    all_day: bool = False
    color: str | None = None
    recurrence_rule: str | None = None
    reminder_minutes: int | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class CalendarEventInput(BaseModel):
    """Model for creating a calendar event."""

    title: str
    description: str = ""
    start_datetime: str
    end_datetime: str | None = None
    all_day: bool = False
    color: str | None = None
    recurrence_rule: str | None = None
    reminder_minutes: int | None = None


class CalendarEventUpdate(BaseModel):
    """Model for updating a calendar event. Unset fields are left untouched."""

    title: str | None = None
    description: str | None = None
    start_datetime: str | None = None
    end_datetime: str | None = None
    all_day: bool | None = None
    color: str | None = None
    recurrence_rule: str | None = None
    reminder_minutes: int | None = None
