"""Mail settings and reminder commands."""

import typer

from noruno.models import MailSettings
from noruno.services.mail_service import send_test_email
from noruno.utils.typer_helpers import SuggestingGroup
from noruno.utils.ui.console import get_console
from noruno.utils.ui.formatters import format_output, format_success

from .context import open_app_context
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Mail settings and reminders")
console = get_console()


@app.command("show")
@command_wrapper
async def show_settings(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show mail settings (password hidden)."""
    async with open_app_context() as ctx:
        settings = await ctx.mail_settings.get_settings()
    format_output(settings.masked(), output)


@app.command("set")
@command_wrapper
async def set_settings(
    email: str | None = typer.Option(None, "--email", "-e", help="Sender and recipient address"),
    password: str | None = typer.Option(None, "--password", "-p", help="App password"),
    minutes: int | None = typer.Option(None, "--minutes", "-m", help="Default reminder threshold", min=0),
    prompt_password: bool = typer.Option(False, "--prompt-password", help="Read the password interactively"),
) -> None:
    """Update mail settings. Omitted options keep their value."""
    if prompt_password:
        password = typer.prompt("App password", hide_input=True)
    async with open_app_context() as ctx:
        current = await ctx.mail_settings.get_settings()
        changes = {
            key: value
            for key, value in {"email": email, "app_password": password, "notification_minutes": minutes}.items()
            if value is not None
        }
        settings = MailSettings.model_validate(current.model_dump() | changes)
        await ctx.mail_settings.save_settings(settings)
    format_success("Mail settings saved")
    format_output(settings.masked(), "table")


@app.command("test")
@command_wrapper
async def test_email() -> None:
    """Send a test email to the configured address."""
    async with open_app_context() as ctx:
        settings = await ctx.mail_settings.get_settings()
        message = await send_test_email(ctx.mail_sender, settings)
    format_success(message)


@app.command("check")
@command_wrapper
async def check_notifications() -> None:
    """Run one reminder check now and print the diagnostic report."""
    async with open_app_context() as ctx:
        report = await ctx.notifications.run_check()
    console.print(report.render(), markup=False, highlight=False)
