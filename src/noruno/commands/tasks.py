"""Task management commands."""

import typer

from noruno.models import SubtaskUpdate, TaskCreate, TaskUpdate
from noruno.utils.typer_helpers import SuggestingGroup
from noruno.utils.ui.formatters import format_output, format_success

from .context import OutputOption, dump, open_app_context, require
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
subtasks_app = typer.Typer(cls=SuggestingGroup, help="Subtask (checklist) commands")


def _task_changes(**fields) -> dict:
    return {key: value for key, value in fields.items() if value is not None}


@app.command("list")
@command_wrapper
async def list_tasks(
    group: str | None = typer.Option(None, "--group", "-g", help="Only tasks in this group"),
    pending: bool = typer.Option(False, "--pending", help="Hide completed tasks"),
    output: str = OutputOption,
    compact: bool = typer.Option(False, "--compact", help="Hide subtasks"),
) -> None:
    """List all tasks."""
    async with open_app_context() as ctx:
        tasks = await ctx.tasks.list_tasks()
    if group is not None:
        tasks = [t for t in tasks if t.group == group]
    if pending:
        tasks = [t for t in tasks if not t.completed]
    format_output(dump(tasks), output, compact=compact)


@app.command("get")
@command_wrapper
async def get_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    output: str = OutputOption,
) -> None:
    """Show one task."""
    async with open_app_context() as ctx:
        task = require(await ctx.tasks.get_task(task_id), "Task", task_id)
    format_output(task.model_dump(mode="json"), output)


@app.command("add")
@command_wrapper
async def add_task(
    description: str = typer.Argument(..., help="Task description"),
    due: str = typer.Option(..., "--due", "-d", help='Due date ("YYYY-MM-DD" or "YYYY-MM-DD HH:MM")'),
    start: str | None = typer.Option(None, "--start", help="Start date"),
    group: str = typer.Option("", "--group", "-g", help="Group name"),
    details: str = typer.Option("", "--details", help="Details"),
    remind: int | None = typer.Option(None, "--remind", help="Reminder threshold in minutes"),
    depends_on: list[int] | None = typer.Option(None, "--depends-on", help="ID of a task this depends on"),
    output: str = OutputOption,
) -> None:
    """Create a new task."""
    data = TaskCreate(
        description=description,
        start_date=start,
        due_date=due,
        group=group,
        details=details,
        notification_minutes=remind,
        dependencies=depends_on or None,
    )
    async with open_app_context() as ctx:
        tasks = await ctx.tasks.add_task(data)
    format_success(f"Task created: {tasks[-1].id}")
    format_output(dump(tasks), output)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    description: str | None = typer.Option(None, "--description", help="New description"),
    due: str | None = typer.Option(None, "--due", "-d", help="New due date"),
    start: str | None = typer.Option(None, "--start", help="New start date"),
    group: str | None = typer.Option(None, "--group", "-g", help="New group"),
    details: str | None = typer.Option(None, "--details", help="New details"),
    remind: int | None = typer.Option(None, "--remind", help="Reminder threshold in minutes"),
    default_remind: bool = typer.Option(False, "--default-remind", help="Use the global reminder threshold"),
    depends_on: list[int] | None = typer.Option(None, "--depends-on", help="Replace dependencies"),
    output: str = OutputOption,
) -> None:
    """Update a task. Only the given options change."""
    changes = _task_changes(
        description=description,
        due_date=due,
        start_date=start,
        group=group,
        details=details,
        notification_minutes=remind,
        dependencies=depends_on or None,
    )
    if default_remind:
        changes["notification_minutes"] = None
    async with open_app_context() as ctx:
        require(await ctx.tasks.get_task(task_id), "Task", task_id)
        tasks = await ctx.tasks.update_task(task_id, TaskUpdate(**changes))
    format_success(f"Task updated: {task_id}")
    format_output(dump(tasks), output)


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    output: str = OutputOption,
) -> None:
    """Delete a task."""
    async with open_app_context() as ctx:
        tasks = await ctx.tasks.delete_task(task_id)
    format_success(f"Task deleted: {task_id}")
    format_output(dump(tasks), output)


@app.command("complete")
@command_wrapper
async def complete_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    output: str = OutputOption,
) -> None:
    """Toggle a task's completion."""
    async with open_app_context() as ctx:
        require(await ctx.tasks.get_task(task_id), "Task", task_id)
        tasks = await ctx.tasks.complete_task(task_id)
    format_output(dump(tasks), output)


@app.command("stats")
@command_wrapper
async def task_stats(output: str = typer.Option("table", "--output", "-o", help="Output format")) -> None:
    """Show task counters (total, completed, pending, overdue)."""
    async with open_app_context() as ctx:
        stats = await ctx.tasks.task_stats()
    format_output(stats.model_dump(), output)


@subtasks_app.command("add")
@command_wrapper
async def add_subtask(
    task_id: int = typer.Argument(..., help="Parent task ID"),
    description: str = typer.Argument(..., help="Subtask description"),
    output: str = OutputOption,
) -> None:
    """Add a subtask to a task."""
    async with open_app_context() as ctx:
        require(await ctx.tasks.get_task(task_id), "Task", task_id)
        tasks = await ctx.tasks.add_subtask(task_id, description)
    format_output(dump(tasks), output)


@subtasks_app.command("update")
@command_wrapper
async def update_subtask(
    task_id: int = typer.Argument(..., help="Parent task ID"),
    subtask_id: int = typer.Argument(..., help="Subtask ID"),
    description: str | None = typer.Option(None, "--description", help="New description"),
    done: bool | None = typer.Option(None, "--done/--not-done", help="Completion"),
    output: str = OutputOption,
) -> None:
    """Update a subtask."""
    changes = _task_changes(description=description, completed=done)
    async with open_app_context() as ctx:
        require(await ctx.tasks.get_task(task_id), "Task", task_id)
        tasks = await ctx.tasks.update_subtask(task_id, subtask_id, SubtaskUpdate(**changes))
    format_output(dump(tasks), output)


@subtasks_app.command("delete")
@command_wrapper
async def delete_subtask(
    task_id: int = typer.Argument(..., help="Parent task ID"),
    subtask_id: int = typer.Argument(..., help="Subtask ID"),
    output: str = OutputOption,
) -> None:
    """Delete a subtask."""
    async with open_app_context() as ctx:
        tasks = await ctx.tasks.delete_subtask(task_id, subtask_id)
    format_output(dump(tasks), output)


@subtasks_app.command("toggle")
@command_wrapper
async def toggle_subtask(
    task_id: int = typer.Argument(..., help="Parent task ID"),
    subtask_id: int = typer.Argument(..., help="Subtask ID"),
    output: str = OutputOption,
) -> None:
    """Toggle a subtask's completion."""
    async with open_app_context() as ctx:
        tasks = await ctx.tasks.toggle_subtask(task_id, subtask_id)
    format_output(dump(tasks), output)
