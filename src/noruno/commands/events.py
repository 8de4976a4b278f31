"""Calendar event commands."""

import typer

from noruno.models import CalendarEventInput, CalendarEventUpdate
from noruno.utils.typer_helpers import SuggestingGroup
from noruno.utils.ui.formatters import format_output, format_success

from .context import OutputOption, dump, open_app_context, require
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Calendar event commands")


@app.command("list")
@command_wrapper
async def list_events(
    start: str | None = typer.Option(None, "--from", help="First day (YYYY-MM-DD)"),
    end: str | None = typer.Option(None, "--to", help="Last day (YYYY-MM-DD)"),
    output: str = OutputOption,
) -> None:
    """List events, optionally within a date range."""
    async with open_app_context() as ctx:
        if start is None and end is None:
            events = await ctx.calendar.list_events()
        else:
            events = await ctx.calendar.events_between(start, end)
    format_output(dump(events), output)


@app.command("get")
@command_wrapper
async def get_event(
    event_id: str = typer.Argument(..., help="Event ID"),
    output: str = OutputOption,
) -> None:
    """Show one event."""
    async with open_app_context() as ctx:
        event = require(await ctx.calendar.get_event(event_id), "Event", event_id)
    format_output(event.model_dump(mode="json"), output)


@app.command("create")
@command_wrapper
async def create_event(
    title: str = typer.Argument(..., help="Event title"),
    start: str = typer.Option(..., "--start", help="Start (YYYY-MM-DD or YYYY-MM-DDTHH:MM)"),
    end: str | None = typer.Option(None, "--end", help="End"),
    all_day: bool = typer.Option(False, "--all-day", help="All-day event"),
    description: str = typer.Option("", "--description", help="Description"),
    color: str | None = typer.Option(None, "--color", help="Display color"),
    rrule: str | None = typer.Option(None, "--rrule", help="Recurrence rule (stored as-is)"),
    remind: int | None = typer.Option(None, "--remind", help="Reminder minutes"),
    output: str = OutputOption,
) -> None:
    """Create an event."""
    data = CalendarEventInput(
        title=title,
        description=description,
        start_datetime=start,
        end_datetime=end,
        all_day=all_day,
        color=color,
        recurrence_rule=rrule,
        reminder_minutes=remind,
    )
    async with open_app_context() as ctx:
        events = await ctx.calendar.create_event(data)
    format_success(f"Event created: {events[-1].id}")
    format_output(dump(events), output)


@app.command("update")
@command_wrapper
async def update_event(
    event_id: str = typer.Argument(..., help="Event ID"),
    title: str | None = typer.Option(None, "--title", help="Title"),
    start: str | None = typer.Option(None, "--start", help="Start"),
    end: str | None = typer.Option(None, "--end", help="End"),
    all_day: bool | None = typer.Option(None, "--all-day/--timed", help="All-day event"),
    description: str | None = typer.Option(None, "--description", help="Description"),
    color: str | None = typer.Option(None, "--color", help="Display color"),
    rrule: str | None = typer.Option(None, "--rrule", help="Recurrence rule"),
    remind: int | None = typer.Option(None, "--remind", help="Reminder minutes"),
    output: str = OutputOption,
) -> None:
    """Update an event. Only the given options change."""
    fields = {
        "title": title,
        "start_datetime": start,
        "end_datetime": end,
        "all_day": all_day,
        "description": description,
        "color": color,
        "recurrence_rule": rrule,
        "reminder_minutes": remind,
    }
    changes = {key: value for key, value in fields.items() if value is not None}
    async with open_app_context() as ctx:
        require(await ctx.calendar.get_event(event_id), "Event", event_id)
        events = await ctx.calendar.update_event(event_id, CalendarEventUpdate(**changes))
    format_output(dump(events), output)


@app.command("delete")
@command_wrapper
async def delete_event(
    event_id: str = typer.Argument(..., help="Event ID"),
    output: str = OutputOption,
) -> None:
    """Delete an event."""
    async with open_app_context() as ctx:
        events = await ctx.calendar.delete_event(event_id)
    format_output(dump(events), output)
