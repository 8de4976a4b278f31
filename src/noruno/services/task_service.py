"""Task service - Business logic for task and subtask operations.

This service layer sits between commands and the task collection. All
mutators return the full, fresh task list.
"""

from __future__ import annotations

from datetime import datetime

from noruno.models import (
    Subtask,
    SubtaskUpdate,
    Task,
    TaskCreate,
    TaskStats,
    TaskUpdate,
)
from noruno.services.collection import EntityCollection, apply_update
from noruno.utils.logger import get_logger
from noruno.utils.reminders import is_overdue

logger = get_logger(__name__)

# Fields whose change invalidates a reminder already sent
_REMINDER_FIELDS = ("due_date", "notification_minutes")


class TaskService:
    """Service for task business logic.

    Task ids come from a counter initialised to max(id) + 1 on load, so an id
    is never reused within a process even after deletions.
    """

    def __init__(self, tasks: EntityCollection[Task]):
        """
        Args:
            tasks: The task collection
        """
        self.tasks = tasks
        self._next_id = 1

    async def load(self) -> None:
        """Load tasks from storage and initialise the id counter."""
        await self.tasks.load()
        existing = await self.tasks.list()
        self._next_id = max((t.id for t in existing), default=0) + 1

    async def list_tasks(self) -> list[Task]:
        return await self.tasks.list()

    async def get_task(self, task_id: int) -> Task | None:
        return await self.tasks.get(task_id)

    async def add_task(self, task_data: TaskCreate) -> list[Task]:
        """Create a new task with the next id.

        Args:
            task_data: TaskCreate object with task details

        Returns:
            All tasks, including the new one
        """
        task = Task(id=self._next_id, **task_data.model_dump())
        self._next_id += 1
        return await self.tasks.add(task)

    async def update_task(self, task_id: int, updates: TaskUpdate) -> list[Task]:
        """Update an existing task.

        Changing the due date or the reminder threshold clears the notified
        latch so a reminder can fire again for the new schedule.
        """

        def mutate(task: Task) -> Task:
            updated = apply_update(task, updates)
            if any(getattr(updated, f) != getattr(task, f) for f in _REMINDER_FIELDS):
                updated.notified = False
            return updated

        return await self.tasks.modify(task_id, mutate)

    async def delete_task(self, task_id: int) -> list[Task]:
        return await self.tasks.remove(task_id)

    async def complete_task(self, task_id: int) -> list[Task]:
        """Toggle a task's completion status."""

        def toggle(task: Task) -> None:
            task.completed = not task.completed

        return await self.tasks.modify(task_id, toggle)

    async def add_subtask(self, task_id: int, description: str) -> list[Task]:
        def add(task: Task) -> None:
            task.subtasks.append(
                Subtask(id=task.next_subtask_id(), description=description)
            )

        return await self.tasks.modify(task_id, add)

    async def update_subtask(
        self, task_id: int, subtask_id: int, updates: SubtaskUpdate
    ) -> list[Task]:
        def update(task: Task) -> None:
            subtask = task.find_subtask(subtask_id)
            if subtask is None:
                logger.warning("Subtask %s of task %s not found", subtask_id, task_id)
                return
            task.subtasks[task.subtasks.index(subtask)] = apply_update(subtask, updates)

        return await self.tasks.modify(task_id, update)

    async def delete_subtask(self, task_id: int, subtask_id: int) -> list[Task]:
        def delete(task: Task) -> None:
            task.subtasks = [s for s in task.subtasks if s.id != subtask_id]

        return await self.tasks.modify(task_id, delete)

    async def toggle_subtask(self, task_id: int, subtask_id: int) -> list[Task]:
        def toggle(task: Task) -> None:
            subtask = task.find_subtask(subtask_id)
            if subtask is not None:
                subtask.completed = not subtask.completed

        return await self.tasks.modify(task_id, toggle)

    async def task_stats(self, now: datetime | None = None) -> TaskStats:
        """Dashboard counters. Tasks with unparseable due dates are never overdue."""
        tasks = await self.tasks.list()
        completed = sum(1 for t in tasks if t.completed)
        return TaskStats(
            total=len(tasks),
            completed=completed,
            pending=len(tasks) - completed,
            overdue=sum(1 for t in tasks if is_overdue(t, now)),
            notified=sum(1 for t in tasks if t.notified),
        )
