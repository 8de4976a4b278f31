"""Group service - task group names.

Deleting or renaming a group re-tags every task that uses it. These are the
only operations holding two locks, always acquired groups first, then tasks.
"""

from __future__ import annotations

import asyncio

from noruno.models import Task
from noruno.repositories import GroupRepository
from noruno.services.collection import EntityCollection
from noruno.utils.logger import get_logger

logger = get_logger(__name__)


class GroupService:
    def __init__(self, repository: GroupRepository, tasks: EntityCollection[Task]):
        self.repository = repository
        self.tasks = tasks
        self.lock = asyncio.Lock()
        self._groups: list[str] = []

    async def load(self) -> None:
        async with self.lock:
            self._groups = await self.repository.load_all()

    async def list_groups(self) -> list[str]:
        async with self.lock:
            return list(self._groups)

    async def create_group(self, name: str) -> list[str]:
        """Add a group. Blank and duplicate names are ignored."""
        name = name.strip()
        async with self.lock:
            if not name or name in self._groups:
                logger.debug("Group %r not created (blank or duplicate)", name)
                return list(self._groups)
            self._groups.append(name)
            await self.repository.save_all(self._groups)
            logger.debug("Created group %r", name)
            return list(self._groups)

    async def delete_group(self, name: str) -> list[str]:
        """Remove a group and clear it on every task that used it.

        An unknown name changes nothing, not even tasks tagged with it.
        """
        async with self.lock:
            if name not in self._groups:
                logger.warning("Delete of unknown group %r ignored", name)
                return list(self._groups)
            self._groups.remove(name)
            await self.repository.save_all(self._groups)
            cleared = await self._retag_tasks(name, "")
            logger.debug("Deleted group %r (%d task(s) cleared)", name, cleared)
            return list(self._groups)

    async def rename_group(self, old: str, new: str) -> list[str]:
        """Rename a group and re-tag its tasks.

        No-op when old is missing, or new is blank or already exists.
        """
        new = new.strip()
        async with self.lock:
            if old not in self._groups or not new or new in self._groups:
                logger.warning("Rename of group %r to %r ignored", old, new)
                return list(self._groups)
            self._groups[self._groups.index(old)] = new
            await self.repository.save_all(self._groups)
            retagged = await self._retag_tasks(old, new)
            logger.debug("Renamed group %r to %r (%d task(s))", old, new, retagged)
            return list(self._groups)

    async def _retag_tasks(self, old: str, new: str) -> int:
        count = 0
        async with self.tasks.lock:
            for task in self.tasks.snapshot():
                if task.group == old:
                    task.group = new
                    self.tasks.put(task)
                    await self.tasks.repository.save(task)
                    count += 1
        return count
