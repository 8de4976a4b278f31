"""Memo and folder commands."""

import typer

from noruno.models import FolderCreate, FolderUpdate, MemoCreate, MemoUpdate
from noruno.utils.typer_helpers import SuggestingGroup
from noruno.utils.ui.formatters import format_output, format_success

from .context import OutputOption, dump, open_app_context, require
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Memo commands")
folders_app = typer.Typer(cls=SuggestingGroup, help="Memo folder commands")


@app.command("list")
@command_wrapper
async def list_memos(
    folder: str | None = typer.Option(None, "--folder", "-f", help="Only memos in this folder"),
    output: str = OutputOption,
) -> None:
    """List memos."""
    async with open_app_context() as ctx:
        if folder is not None:
            memos = await ctx.memos.list_memos_in_folder(folder)
        else:
            memos = await ctx.memos.list_memos()
    format_output(dump(memos), output)


@app.command("get")
@command_wrapper
async def get_memo(
    memo_id: str = typer.Argument(..., help="Memo ID"),
    output: str = OutputOption,
) -> None:
    """Show one memo."""
    async with open_app_context() as ctx:
        memo = require(await ctx.memos.get_memo(memo_id), "Memo", memo_id)
    format_output(memo.model_dump(mode="json"), output)


@app.command("create")
@command_wrapper
async def create_memo(
    title: str = typer.Argument(..., help="Memo title"),
    content: str = typer.Option("", "--content", "-c", help="Memo body"),
    folder: str | None = typer.Option(None, "--folder", "-f", help="Folder ID"),
    tags: list[str] | None = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    output: str = OutputOption,
) -> None:
    """Create a memo."""
    data = MemoCreate(title=title, content=content, folder_id=folder, tags=tags or [])
    async with open_app_context() as ctx:
        memos = await ctx.memos.create_memo(data)
    format_success(f"Memo created: {memos[-1].id}")
    format_output(dump(memos), output)


@app.command("update")
@command_wrapper
async def update_memo(
    memo_id: str = typer.Argument(..., help="Memo ID"),
    title: str | None = typer.Option(None, "--title", help="New title"),
    content: str | None = typer.Option(None, "--content", "-c", help="New body"),
    folder: str | None = typer.Option(None, "--folder", "-f", help="Move to folder"),
    unfile: bool = typer.Option(False, "--unfile", help="Remove from its folder"),
    tags: list[str] | None = typer.Option(None, "--tag", "-t", help="Replace tags"),
    output: str = OutputOption,
) -> None:
    """Update a memo. Only the given options change."""
    changes = {
        key: value
        for key, value in {"title": title, "content": content, "folder_id": folder, "tags": tags or None}.items()
        if value is not None
    }
    if unfile:
        changes["folder_id"] = None
    async with open_app_context() as ctx:
        require(await ctx.memos.get_memo(memo_id), "Memo", memo_id)
        memos = await ctx.memos.update_memo(memo_id, MemoUpdate(**changes))
    format_output(dump(memos), output)


@app.command("delete")
@command_wrapper
async def delete_memo(
    memo_id: str = typer.Argument(..., help="Memo ID"),
    output: str = OutputOption,
) -> None:
    """Delete a memo."""
    async with open_app_context() as ctx:
        memos = await ctx.memos.delete_memo(memo_id)
    format_output(dump(memos), output)


@app.command("search")
@command_wrapper
async def search_memos(
    query: str = typer.Argument("", help="Text to find in title, content or tags"),
    output: str = OutputOption,
) -> None:
    """Search memos (case-insensitive)."""
    async with open_app_context() as ctx:
        memos = await ctx.memos.search_memos(query)
    format_output(dump(memos), output)


@app.command("tags")
@command_wrapper
async def list_tags(output: str = OutputOption) -> None:
    """List every tag in use."""
    async with open_app_context() as ctx:
        tags = await ctx.memos.get_all_tags()
    format_output(tags, output)


@folders_app.command("list")
@command_wrapper
async def list_folders(output: str = OutputOption) -> None:
    """List folders."""
    async with open_app_context() as ctx:
        folders = await ctx.folders.list_folders()
    format_output(dump(folders), output)


@folders_app.command("create")
@command_wrapper
async def create_folder(
    name: str = typer.Argument(..., help="Folder name"),
    parent: str | None = typer.Option(None, "--parent", "-p", help="Parent folder ID"),
    output: str = OutputOption,
) -> None:
    """Create a folder."""
    async with open_app_context() as ctx:
        folders = await ctx.folders.create_folder(FolderCreate(name=name, parent_id=parent))
    format_success(f"Folder created: {folders[-1].id}")
    format_output(dump(folders), output)


@folders_app.command("update")
@command_wrapper
async def update_folder(
    folder_id: str = typer.Argument(..., help="Folder ID"),
    name: str | None = typer.Option(None, "--name", help="New name"),
    parent: str | None = typer.Option(None, "--parent", "-p", help="New parent folder ID"),
    root: bool = typer.Option(False, "--root", help="Move to the top level"),
    output: str = OutputOption,
) -> None:
    """Rename or move a folder."""
    changes = {key: value for key, value in {"name": name, "parent_id": parent}.items() if value is not None}
    if root:
        changes["parent_id"] = None
    async with open_app_context() as ctx:
        require(await ctx.folders.get_folder(folder_id), "Folder", folder_id)
        folders = await ctx.folders.update_folder(folder_id, FolderUpdate(**changes))
    format_output(dump(folders), output)


@folders_app.command("delete")
@command_wrapper
async def delete_folder(
    folder_id: str = typer.Argument(..., help="Folder ID"),
    output: str = OutputOption,
) -> None:
    """Delete a folder. Its memos become unfiled."""
    async with open_app_context() as ctx:
        folders = await ctx.folders.delete_folder(folder_id)
    format_output(dump(folders), output)
