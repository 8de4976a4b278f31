"""SQLite implementation of the task repository."""

from __future__ import annotations

from noruno.adapters.sqlite.base_repository import SqliteCollectionRepository
from noruno.models import Task


class SqliteTaskRepository(SqliteCollectionRepository[Task]):
    """SQLite implementation of task repository."""

    model = Task
    table = "tasks"
    columns = [
        "id",
        "description",
        "start_date",
        "due_date",
        "group_name",
        "details",
        "completed",
        "notified",
        "notification_minutes",
        "subtasks",
        "dependencies",
    ]
    json_columns = frozenset({"subtasks", "dependencies"})
    column_names = {"group": "group_name"}
