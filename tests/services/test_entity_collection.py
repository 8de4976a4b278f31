"""Tests for EntityCollection locking and persistence behaviour."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from noruno.models import Task
from noruno.models.exceptions import PersistenceError
from noruno.services.collection import EntityCollection


def _task(task_id: int) -> Task:
    return Task(id=task_id, description=f"task {task_id}", due_date="2025-01-01")


@pytest.fixture
def repository() -> AsyncMock:
    repo = AsyncMock()
    repo.load_all.return_value = [_task(1), _task(2)]
    return repo


@pytest.mark.asyncio
async def test_load_and_list(repository):
    collection = EntityCollection("task", repository)
    await collection.load()

    assert [t.id for t in await collection.list()] == [1, 2]


@pytest.mark.asyncio
async def test_readers_get_copies(repository):
    collection = EntityCollection("task", repository)
    await collection.load()

    (await collection.get(1)).description = "changed"
    (await collection.list())[0].subtasks.append("x")

    assert (await collection.get(1)).description == "task 1"
    assert (await collection.get(1)).subtasks == []


@pytest.mark.asyncio
async def test_add_persists_single_entity(repository):
    collection = EntityCollection("task", repository)

    result = await collection.add(_task(3))

    repository.save.assert_awaited_once()
    assert [t.id for t in result] == [3]


@pytest.mark.asyncio
async def test_modify_with_replacement(repository):
    collection = EntityCollection("task", repository)
    await collection.load()

    result = await collection.modify(2, lambda t: t.model_copy(update={"completed": True}))

    assert [t.completed for t in result] == [False, True]
    saved = repository.save.await_args.args[0]
    assert saved.id == 2 and saved.completed is True


@pytest.mark.asyncio
async def test_missing_ids_do_not_touch_storage(repository):
    collection = EntityCollection("task", repository)
    await collection.load()

    await collection.modify(9, lambda t: None)
    await collection.remove(9)

    repository.save.assert_not_awaited()
    repository.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_remove(repository):
    collection = EntityCollection("task", repository)
    await collection.load()

    assert [t.id for t in await collection.remove(1)] == [2]
    repository.delete.assert_awaited_once_with(1)


@pytest.mark.asyncio
async def test_persistence_error_propagates_without_rollback(repository):
    collection = EntityCollection("task", repository)
    repository.save.side_effect = PersistenceError("disk full")

    with pytest.raises(PersistenceError):
        await collection.add(_task(5))

    assert [t.id for t in await collection.list()] == [5]
    assert not collection.lock.locked()


@pytest.mark.asyncio
async def test_mutations_are_serialised(repository):
    collection = EntityCollection("task", repository)
    await collection.load()
    active = 0
    peak = 0

    async def slow_save(entity):
        nonlocal active, peak
        active += 1
        peak = max(peak, active)
        await asyncio.sleep(0.01)
        active -= 1

    repository.save.side_effect = slow_save

    def complete(task):
        task.completed = True

    await asyncio.gather(*(collection.modify(i, complete) for i in (1, 2, 1, 2)))

    assert peak == 1
    assert repository.save.await_count == 4
