"""Task data models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Subtask(BaseModel):
    """Checklist item owned by a single task.

    Attributes:
        id: Identifier, unique only within the parent task
        description: Subtask text
        completed: Completion status
    """

    id: int
    description: str
    completed: bool = False


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Monotonic integer identifier
        description: Main task text
        start_date: Optional start date string
        due_date: Free-form due date ("YYYY-MM-DD" or "YYYY-MM-DD HH:MM")
        group: Group label, empty string when ungrouped
        details: Free-text details
        completed: Completion status
        notified: Latch set once a reminder fired for the current due date
        notification_minutes: Per-task reminder threshold in minutes
        subtasks: Embedded checklist
        dependencies: IDs of tasks this task depends on
    """

    id: int
    description: str
    start_date: str | None = None
    due_date: str
    group: str = ""
    details: str = ""
    completed: bool = False
    notified: bool = False
    notification_minutes: int | None = None
    subtasks: list[Subtask] = Field(default_factory=list)
    dependencies: list[int] | None = None

    def next_subtask_id(self) -> int:
        """Return max existing subtask id + 1, or 1 when there are none."""
        return max((s.id for s in self.subtasks), default=0) + 1

    def find_subtask(self, subtask_id: int) -> Subtask | None:
        for subtask in self.subtasks:
            if subtask.id == subtask_id:
                return subtask
        return None


class TaskCreate(BaseModel):
    """Model for creating a new task."""

    description: str
    start_date: str | None = None
    due_date: str
    group: str = ""
    details: str = ""
    notification_minutes: int | None = None
    dependencies: list[int] | None = None


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    Only fields explicitly set are applied, so passing ``None`` clears an
    optional field while omitting it leaves the stored value untouched.
    """

    description: str | None = None
    start_date: str | None = None
    due_date: str | None = None
    group: str | None = None
    details: str | None = None
    notification_minutes: int | None = None
    dependencies: list[int] | None = None


class SubtaskUpdate(BaseModel):
    """Model for updating a subtask."""

    description: str | None = None
    completed: bool | None = None


class TaskStats(BaseModel):
    """Aggregate task counters for the dashboard."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    notified: int = 0
