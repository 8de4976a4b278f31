"""Tests for CalendarService."""

from __future__ import annotations

import pytest

from noruno.models import CalendarEventInput, CalendarEventUpdate


async def _event(ctx, title: str, start: str, **kwargs):
    events = await ctx.calendar.create_event(
        CalendarEventInput(title=title, start_datetime=start, **kwargs)
    )
    return events[-1]


@pytest.mark.asyncio
async def test_create_and_reload(ctx, reopen):
    event = await _event(
        ctx, "Standup", "2025-01-06 09:00", recurrence_rule="FREQ=WEEKLY;BYDAY=MO"
    )

    (reloaded,) = await (await reopen()).calendar.list_events()

    assert reloaded == event


@pytest.mark.asyncio
async def test_update_preserves_created_at(ctx):
    event = await _event(ctx, "Dentist", "2025-02-03 14:00")

    (updated,) = await ctx.calendar.update_event(
        event.id, CalendarEventUpdate(start_datetime="2025-02-04 14:00", all_day=True)
    )

    assert updated.start_datetime == "2025-02-04 14:00"
    assert updated.all_day is True
    assert updated.title == "Dentist"
    assert updated.created_at == event.created_at
    assert updated.updated_at >= event.updated_at


@pytest.mark.asyncio
async def test_delete(ctx):
    event = await _event(ctx, "Dentist", "2025-02-03 14:00")
    assert await ctx.calendar.delete_event(event.id) == []


@pytest.mark.asyncio
async def test_events_between(ctx):
    await _event(ctx, "a", "2025-01-01 09:00")
    await _event(ctx, "b", "2025-01-15")
    await _event(ctx, "c", "2025-02-01 18:30")

    def titles(events):
        return [e.title for e in events]

    assert titles(await ctx.calendar.events_between("2025-01-01", "2025-01-31")) == ["a", "b"]
    assert titles(await ctx.calendar.events_between(start="2025-01-15")) == ["b", "c"]
    assert titles(await ctx.calendar.events_between(end="2025-01-01")) == ["a"]
    assert titles(await ctx.calendar.events_between()) == ["a", "b", "c"]
