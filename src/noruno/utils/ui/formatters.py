"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from noruno.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "pretty", compact: bool = False) -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif output_format == "table":
        format_table(data)
    elif output_format == "quiet":
        format_quiet(data)
    else:
        format_pretty(data, compact=compact)


def _cell(value: Any) -> str:
    """Plain text of a value, escaped for use in rich markup."""
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(_cell(v) if not isinstance(v, dict) else escape(str(v.get("id", v))) for v in value)
    if value is None:
        return "-"
    return escape(str(value))


def format_table(data: Any) -> None:
    """Format data as a table."""
    if isinstance(data, list):
        if not data:
            console.print("[yellow]No items found[/yellow]")
        elif isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(escape(str(item)))
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table (columns from the first item)."""
    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())
    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))
    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))
    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

STATUS_ICONS = {
    "open": "⬜",
    "completed": "☑️",
    "notified": "🔔",
}

READING_STATUS_ICONS = {
    "want_to_read": "📚",
    "reading": "📖",
    "finished": "✅",
    "paused": "⏸️",
}


def format_pretty(data: Any, compact: bool = False) -> None:
    """Format data in pretty format, detecting the entity kind from its keys."""
    if isinstance(data, list):
        if not data:
            console.print("[yellow]No items found[/yellow]")
            return
        if not isinstance(data[0], dict):
            for item in data:
                console.print(f"• {escape(str(item))}")
            return
        first_item = data[0]
        if "due_date" in first_item and "subtasks" in first_item:
            format_tasks_pretty(data, compact)
        elif "reading_sessions" in first_item:
            format_books_pretty(data, compact)
        elif "start_datetime" in first_item:
            format_events_pretty(data)
        else:
            format_generic_list_pretty(data)
    elif isinstance(data, dict):
        format_single_item_pretty(data)
    else:
        console.print(data)


def format_tasks_pretty(tasks: list[dict], compact: bool = False) -> None:
    """Format tasks with their subtasks."""
    pending = [t for t in tasks if not t.get("completed")]
    header = Text()
    header.append("📋 Tasks ", style="bold cyan")
    header.append(f"({len(pending)} pending, {len(tasks) - len(pending)} done)", style="dim")
    console.print(header)
    console.print()

    for task in tasks:
        icon = STATUS_ICONS["completed"] if task.get("completed") else STATUS_ICONS["open"]
        line = Text()
        line.append(f"{icon} ")
        line.append(f"[{task['id']}] ", style="dim")
        line.append(task["description"], style="dim strike" if task.get("completed") else "bold")
        line.append(f"  📅 {task['due_date']}", style="cyan")
        if task.get("group"):
            line.append(f"  #{task['group']}", style="magenta")
        if task.get("notified"):
            line.append(f"  {STATUS_ICONS['notified']}")
        console.print(line)
        if compact:
            continue
        for subtask in task.get("subtasks") or []:
            mark = "☑" if subtask.get("completed") else "☐"
            line = Text(f"    {mark} ")
            line.append(f"{subtask['id']}.", style="dim")
            line.append(f" {subtask['description']}")
            console.print(line)


def format_books_pretty(books: list[dict], compact: bool = False) -> None:
    """Format reading log books with progress bars."""
    for book in books:
        icon = READING_STATUS_ICONS.get(book.get("status"), "📚")
        line = Text()
        line.append(f"{icon} {book['title']}", style="bold")
        if book.get("author"):
            line.append(f" by {book['author']}", style="italic")
        line.append(f"  ({book['id']})", style="dim")
        console.print(line)
        if compact:
            continue
        percent = book.get("progress_percent")
        if percent is not None:
            console.print(f"    {get_progress_bar(percent)} {percent}%")
        notes = len(book.get("notes") or [])
        sessions = len(book.get("reading_sessions") or [])
        console.print(f"    [dim]{notes} note(s), {sessions} session(s)[/dim]")


def format_events_pretty(events: list[dict]) -> None:
    """Format calendar events in start order."""
    for event in sorted(events, key=lambda e: e["start_datetime"]):
        when = event["start_datetime"]
        if event.get("end_datetime"):
            when = f"{when} → {event['end_datetime']}"
        if event.get("all_day"):
            when = f"{event['start_datetime'][:10]} (all day)"
        line = Text("🗓️  ")
        line.append(event["title"], style="bold")
        line.append(f"  {when}", style="cyan")
        line.append(f"  ({event['id']})", style="dim")
        console.print(line)


def format_generic_list_pretty(items: list[dict]) -> None:
    """Format generic list of items."""
    for item in items:
        label = item.get("name") or item.get("title") or item.get("id", "Item")
        line = Text("• ")
        line.append(str(label), style="bold")
        if "id" in item and label != item["id"]:
            line.append(f"  ({item['id']})", style="dim")
        console.print(line)


def format_single_item_pretty(item: dict) -> None:
    """Format a single item in pretty format."""
    for key, value in item.items():
        formatted_key = key.replace("_", " ").title()
        console.print(f"[cyan]{formatted_key}:[/cyan] {_cell(value)}")


def format_quiet(data: Any) -> None:
    """Format output in quiet mode (IDs only)."""
    if isinstance(data, list):
        for item in data:
            if isinstance(item, dict) and "id" in item:
                print(item["id"])
            elif not isinstance(item, dict):
                print(item)
    elif isinstance(data, dict) and "id" in data:
        print(data["id"])


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = max(0, min(10, int(percentage / 10)))
    return "▓" * filled + "░" * (10 - filled)
