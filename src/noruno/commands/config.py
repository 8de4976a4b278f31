"""Configuration management commands."""

import typer

from noruno.services.config_service import get_config_service
from noruno.utils.typer_helpers import SuggestingGroup
from noruno.utils.ui.console import get_console
from noruno.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("yaml", "--output", "-o", help="Output format"),
) -> None:
    """Show the current configuration."""
    format_output(get_config_service().config.model_dump(), output)


@app.command("set-backend")
@command_wrapper
def set_backend(
    backend: str = typer.Argument(..., help="Storage backend: sqlite or json"),
) -> None:
    """Switch the storage backend. Existing data is not migrated."""
    config = get_config_service().set_backend(backend)
    format_success(f"Storage backend set to {config.storage.backend}")


@app.command("path")
@command_wrapper
def show_paths() -> None:
    """Show where configuration and data live."""
    config_service = get_config_service()
    console.print(f"config: {config_service.config_path}", markup=False)
    console.print(f"data:   {config_service.data_dir}", markup=False)


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset configuration to defaults?"):
        raise typer.Exit(0)
    get_config_service().reset_config()
    format_success("Configuration reset")
