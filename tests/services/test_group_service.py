"""Tests for GroupService."""

from __future__ import annotations

import pytest

from noruno.models import TaskCreate


async def _add_task(ctx, description: str, group: str) -> None:
    await ctx.tasks.add_task(
        TaskCreate(description=description, due_date="2025-01-01", group=group)
    )


@pytest.mark.asyncio
async def test_create_keeps_order_and_strips(ctx):
    await ctx.groups.create_group("Work")
    groups = await ctx.groups.create_group("  Home ")

    assert groups == ["Work", "Home"]


@pytest.mark.asyncio
async def test_create_ignores_blank_and_duplicates(ctx):
    await ctx.groups.create_group("Work")
    await ctx.groups.create_group("   ")

    assert await ctx.groups.create_group("Work") == ["Work"]


@pytest.mark.asyncio
async def test_delete_clears_group_on_tasks(ctx, reopen):
    await ctx.groups.create_group("Work")
    await ctx.groups.create_group("Home")
    await _add_task(ctx, "report", "Work")
    await _add_task(ctx, "dishes", "Home")

    groups = await ctx.groups.delete_group("Work")

    assert groups == ["Home"]
    tasks = await ctx.tasks.list_tasks()
    assert [t.group for t in tasks] == ["", "Home"]

    reopened = await reopen()
    assert await reopened.groups.list_groups() == ["Home"]
    assert [t.group for t in await reopened.tasks.list_tasks()] == ["", "Home"]


@pytest.mark.asyncio
async def test_delete_unknown_group_leaves_tasks_tagged(ctx):
    await ctx.groups.create_group("Home")
    await _add_task(ctx, "report", "Work")

    groups = await ctx.groups.delete_group("Work")

    assert groups == ["Home"]
    assert [t.group for t in await ctx.tasks.list_tasks()] == ["Work"]


@pytest.mark.asyncio
async def test_rename_retags_tasks(ctx, reopen):
    await ctx.groups.create_group("Work")
    await _add_task(ctx, "report", "Work")
    await _add_task(ctx, "loose", "")

    groups = await ctx.groups.rename_group("Work", "Office")

    assert groups == ["Office"]
    assert [t.group for t in await ctx.tasks.list_tasks()] == ["Office", ""]
    reopened = await reopen()
    assert [t.group for t in await reopened.tasks.list_tasks()] == ["Office", ""]


@pytest.mark.asyncio
async def test_rename_keeps_position(ctx):
    for name in ("A", "B", "C"):
        await ctx.groups.create_group(name)

    assert await ctx.groups.rename_group("B", "Bee") == ["A", "Bee", "C"]


@pytest.mark.asyncio
@pytest.mark.parametrize(("old", "new"), [("Missing", "X"), ("Work", "  "), ("Work", "Home")])
async def test_rename_rejected_cases_are_no_ops(ctx, old, new):
    await ctx.groups.create_group("Work")
    await ctx.groups.create_group("Home")
    await _add_task(ctx, "report", "Work")

    assert await ctx.groups.rename_group(old, new) == ["Work", "Home"]
    assert (await ctx.tasks.get_task(1)).group == "Work"
