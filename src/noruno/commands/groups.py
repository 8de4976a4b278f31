"""Task group commands."""

import typer

from noruno.utils.typer_helpers import SuggestingGroup
from noruno.utils.ui.formatters import format_output

from .context import OutputOption, open_app_context
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task group commands")


@app.command("list")
@command_wrapper
async def list_groups(output: str = OutputOption) -> None:
    """List group names."""
    async with open_app_context() as ctx:
        groups = await ctx.groups.list_groups()
    format_output(groups, output)


@app.command("create")
@command_wrapper
async def create_group(
    name: str = typer.Argument(..., help="Group name"),
    output: str = OutputOption,
) -> None:
    """Create a group (blank and duplicate names are ignored)."""
    async with open_app_context() as ctx:
        groups = await ctx.groups.create_group(name)
    format_output(groups, output)


@app.command("delete")
@command_wrapper
async def delete_group(
    name: str = typer.Argument(..., help="Group name"),
    output: str = OutputOption,
) -> None:
    """Delete a group and ungroup its tasks."""
    async with open_app_context() as ctx:
        groups = await ctx.groups.delete_group(name)
    format_output(groups, output)


@app.command("rename")
@command_wrapper
async def rename_group(
    old: str = typer.Argument(..., help="Current name"),
    new: str = typer.Argument(..., help="New name"),
    output: str = OutputOption,
) -> None:
    """Rename a group and re-tag its tasks."""
    async with open_app_context() as ctx:
        groups = await ctx.groups.rename_group(old, new)
    format_output(groups, output)
