"""Main entry point for the Noruno CLI."""

import asyncio
import signal

import typer

from noruno import __version__
from noruno.commands import books, config, events, groups, mail, memos, tasks
from noruno.commands.context import open_app_context
from noruno.commands.decorators import command_wrapper
from noruno.utils.logger import get_logger
from noruno.utils.typer_helpers import SuggestingGroup
from noruno.utils.ui.console import get_console

app = typer.Typer(
    name="noruno",
    cls=SuggestingGroup,
    help="Personal tasks, memos, reading log and calendar with due-date email reminders",
    no_args_is_help=True,
)

console = get_console()
logger = get_logger(__name__)

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(tasks.subtasks_app, name="subtasks", help="Subtask commands")
app.add_typer(groups.app, name="groups", help="Task group commands")
app.add_typer(memos.app, name="memos", help="Memo commands")
app.add_typer(memos.folders_app, name="folders", help="Memo folder commands")
app.add_typer(books.app, name="books", help="Reading log commands")
app.add_typer(books.notes_app, name="notes", help="Book note commands")
app.add_typer(books.sessions_app, name="sessions", help="Reading session commands")
app.add_typer(events.app, name="events", help="Calendar event commands")
app.add_typer(mail.app, name="mail", help="Mail settings and reminders")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Noruno[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
@command_wrapper
async def serve(
    interval: int | None = typer.Option(None, "--interval", help="Seconds between checks (default from config)", min=1),
) -> None:
    """Run the reminder scheduler until interrupted (Ctrl+C)."""
    async with open_app_context() as ctx:
        if not ctx.config.notifications.enabled:
            console.print("[yellow]Notifications are disabled in the configuration.[/yellow]")
            return
        scheduler = ctx.scheduler()
        if interval is not None:
            scheduler.interval_seconds = interval

        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop.set)
            except NotImplementedError:
                logger.debug("Signal handler for %s unavailable", sig)

        scheduler.start()
        console.print(
            f"[green]Reminder scheduler running[/green] every {scheduler.interval_seconds}s "
            "[dim](Ctrl+C to stop)[/dim]"
        )
        try:
            await stop.wait()
        finally:
            await scheduler.stop()
        console.print("[dim]Scheduler stopped.[/dim]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
