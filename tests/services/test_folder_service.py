"""Tests for FolderService."""

from __future__ import annotations

import pytest

from noruno.models import FolderCreate, FolderUpdate, MemoCreate
from noruno.models.exceptions import InvalidOperationError


async def _folder(ctx, name: str, parent_id: str | None = None):
    folders = await ctx.folders.create_folder(FolderCreate(name=name, parent_id=parent_id))
    return folders[-1]


@pytest.mark.asyncio
async def test_create_nested(ctx):
    root = await _folder(ctx, "Root")
    child = await _folder(ctx, "Child", root.id)

    assert child.parent_id == root.id
    assert [f.name for f in await ctx.folders.list_folders()] == ["Root", "Child"]


@pytest.mark.asyncio
async def test_rename(ctx):
    root = await _folder(ctx, "Root")

    (folder,) = await ctx.folders.update_folder(root.id, FolderUpdate(name="Top"))

    assert folder.name == "Top"


@pytest.mark.asyncio
async def test_move_to_root(ctx):
    root = await _folder(ctx, "Root")
    child = await _folder(ctx, "Child", root.id)

    folders = await ctx.folders.update_folder(child.id, FolderUpdate(parent_id=None))

    assert folders[1].parent_id is None


@pytest.mark.asyncio
async def test_folder_cannot_be_its_own_parent(ctx):
    root = await _folder(ctx, "Root")

    with pytest.raises(InvalidOperationError):
        await ctx.folders.update_folder(root.id, FolderUpdate(parent_id=root.id))


@pytest.mark.asyncio
async def test_folder_cannot_move_under_descendant(ctx):
    root = await _folder(ctx, "Root")
    child = await _folder(ctx, "Child", root.id)
    grandchild = await _folder(ctx, "Grandchild", child.id)

    with pytest.raises(InvalidOperationError):
        await ctx.folders.update_folder(root.id, FolderUpdate(parent_id=grandchild.id))

    assert (await ctx.folders.get_folder(root.id)).parent_id is None


@pytest.mark.asyncio
async def test_update_missing_is_no_op(ctx):
    await _folder(ctx, "Root")

    folders = await ctx.folders.update_folder("missing", FolderUpdate(name="x"))

    assert [f.name for f in folders] == ["Root"]


@pytest.mark.asyncio
async def test_delete_unfiles_memos(ctx, reopen):
    work = await _folder(ctx, "Work")
    home = await _folder(ctx, "Home")
    await ctx.memos.create_memo(MemoCreate(title="a", folder_id=work.id))
    await ctx.memos.create_memo(MemoCreate(title="b", folder_id=home.id))
    before = {m.title: m for m in await ctx.memos.list_memos()}

    folders = await ctx.folders.delete_folder(work.id)

    assert [f.name for f in folders] == ["Home"]
    memos = {m.title: m for m in await ctx.memos.list_memos()}
    assert memos["a"].folder_id is None
    assert memos["a"].updated_at == before["a"].updated_at
    assert memos["b"].folder_id == home.id

    reopened = await reopen()
    reloaded = {m.title: m for m in await reopened.memos.list_memos()}
    assert reloaded["a"].folder_id is None
    assert [f.name for f in await reopened.folders.list_folders()] == ["Home"]


@pytest.mark.asyncio
async def test_delete_leaves_child_folders(ctx):
    root = await _folder(ctx, "Root")
    child = await _folder(ctx, "Child", root.id)

    (remaining,) = await ctx.folders.delete_folder(root.id)

    assert remaining.id == child.id
    assert remaining.parent_id == root.id
