"""Due-date reminder evaluation.

A task fires a reminder when it is due within its threshold and not yet
overdue: ``0 <= minutes_until_due <= threshold``. Overdue tasks that were
never notified stay silent.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from noruno.models.exceptions import ReminderParseError
from noruno.models.settings import MailSettings
from noruno.models.task import Task

DATETIME_FORMAT = "%Y-%m-%d %H:%M"
DATE_FORMAT = "%Y-%m-%d"

_MICROSECONDS_PER_MINUTE = 60_000_000


@dataclass(frozen=True)
class ReminderDecision:
    """Outcome of evaluating a single task."""

    minutes_until_due: int
    threshold: int
    notify: bool


def parse_due_date(due_date: str) -> datetime:
    """Parse a due date string into a naive local datetime.

    Accepts "YYYY-MM-DD HH:MM" or a bare "YYYY-MM-DD" (local midnight).
    Anything after the first whitespace is ignored for the date-only form.

    Raises:
        ReminderParseError: If neither format matches
    """
    try:
        return datetime.strptime(due_date, DATETIME_FORMAT)
    except ValueError:
        pass

    parts = due_date.split()
    date_part = parts[0] if parts else due_date
    try:
        return datetime.strptime(date_part, DATE_FORMAT)
    except ValueError as e:
        raise ReminderParseError(due_date) from e


def _local_naive(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now()
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def _whole_minutes(delta: timedelta) -> int:
    """Whole minutes in delta, truncated toward zero."""
    micros = delta // timedelta(microseconds=1)
    minutes = abs(micros) // _MICROSECONDS_PER_MINUTE
    return minutes if micros >= 0 else -minutes


def minutes_until_due(due_date: str, now: datetime | None = None) -> int:
    """Minutes from now until the due instant (negative when overdue)."""
    due = parse_due_date(due_date)
    return _whole_minutes(due - _local_naive(now))


def should_notify(minutes_until_due: int, threshold_minutes: int) -> bool:
    """True when the task is due within the threshold and not overdue."""
    return 0 <= minutes_until_due <= threshold_minutes


def effective_threshold(task: Task, settings: MailSettings) -> int:
    """Per-task threshold when set, else the global default."""
    if task.notification_minutes is not None:
        return task.notification_minutes
    return settings.notification_minutes


def evaluate_task(
    task: Task, settings: MailSettings, now: datetime | None = None
) -> ReminderDecision:
    """Evaluate whether a reminder for task should fire at now.

    Completion and the notified latch are not checked here; callers filter
    those before evaluating.

    Raises:
        ReminderParseError: If the task's due date cannot be parsed
    """
    minutes = minutes_until_due(task.due_date, now)
    threshold = effective_threshold(task, settings)
    return ReminderDecision(
        minutes_until_due=minutes,
        threshold=threshold,
        notify=should_notify(minutes, threshold),
    )


def is_overdue(task: Task, now: datetime | None = None) -> bool:
    """True for incomplete tasks whose due date has passed.

    Tasks with unparseable due dates are never overdue.
    """
    if task.completed:
        return False
    try:
        return minutes_until_due(task.due_date, now) < 0
    except ReminderParseError:
        return False
