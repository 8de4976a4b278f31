"""In-memory entity collection guarded by an asyncio lock.

Each entity kind lives in one ``EntityCollection``: an ordered list, a lock
and the repository that persists it. Every mutation is persisted before the
lock is released; readers only ever receive deep copies.

Services that need several steps under one lock acquire ``collection.lock``
themselves and use the lock-free helpers (``find``, ``snapshot``, ``put``,
``discard``, ``reload``, ``persist``), which must only be called while
holding the lock.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from noruno.models.exceptions import InvalidOperationError
from noruno.repositories import CollectionRepository
from noruno.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

# A mutator edits the live entity in place, or returns a replacement.
Mutator = Callable[[T], T | None]


def apply_update(entity: T, update: BaseModel) -> T:
    """Return a validated copy of entity with the explicitly set fields of update applied.

    Raises:
        InvalidOperationError: If the result is not a valid entity (for
            instance a required field explicitly set to None)
    """
    data = entity.model_dump() | update.model_dump(exclude_unset=True)
    try:
        return type(entity).model_validate(data)
    except ValidationError as e:
        raise InvalidOperationError(
            f"Invalid update for {type(entity).__name__}: {e.error_count()} invalid field(s)"
        ) from e


class EntityCollection(Generic[T]):
    """Ordered, lock-guarded list of one entity kind."""

    def __init__(
        self,
        kind: str,
        repository: CollectionRepository[T],
        id_of: Callable[[T], Hashable] = lambda entity: entity.id,
    ):
        """
        Args:
            kind: Entity kind name used in logs and errors ("task", "memo"...)
            repository: Persistence for this kind
            id_of: Identity accessor
        """
        self.kind = kind
        self.repository = repository
        self.id_of = id_of
        self.lock = asyncio.Lock()
        self._items: list[T] = []

    async def load(self) -> None:
        """Replace the contents from the repository."""
        async with self.lock:
            self._items = await self.repository.load_all()
        logger.debug("Loaded %d %s(s)", len(self._items), self.kind)

    # Lock-free helpers (caller holds self.lock)

    def snapshot(self) -> list[T]:
        return [item.model_copy(deep=True) for item in self._items]

    def find(self, entity_id: Hashable) -> T | None:
        """Live entity with entity_id, or None."""
        for item in self._items:
            if self.id_of(item) == entity_id:
                return item
        return None

    def put(self, entity: T) -> None:
        """Replace the entity with the same id, or append it."""
        entity_id = self.id_of(entity)
        for index, item in enumerate(self._items):
            if self.id_of(item) == entity_id:
                self._items[index] = entity
                return
        self._items.append(entity)

    def discard(self, entity_id: Hashable) -> bool:
        """Remove the entity with entity_id. Returns False when missing."""
        for index, item in enumerate(self._items):
            if self.id_of(item) == entity_id:
                del self._items[index]
                return True
        return False

    # Locked operations

    async def list(self) -> list[T]:
        async with self.lock:
            return self.snapshot()

    async def get(self, entity_id: Hashable) -> T | None:
        async with self.lock:
            entity = self.find(entity_id)
            return entity.model_copy(deep=True) if entity is not None else None

    async def add(self, entity: T) -> list[T]:
        async with self.lock:
            self._items.append(entity)
            await self.repository.save(entity)
            logger.debug("Added %s %s", self.kind, self.id_of(entity))
            return self.snapshot()

    async def modify(self, entity_id: Hashable, mutator: Mutator) -> list[T]:
        """Apply mutator to the entity with entity_id and persist it.

        A missing id leaves the collection unchanged and is logged.
        """
        async with self.lock:
            entity = self.find(entity_id)
            if entity is None:
                logger.warning("Update ignored: %s %s not found", self.kind, entity_id)
                return self.snapshot()
            replacement = mutator(entity)
            if replacement is not None:
                self.put(replacement)
                entity = replacement
            await self.repository.save(entity)
            logger.debug("Updated %s %s", self.kind, entity_id)
            return self.snapshot()

    async def remove(self, entity_id: Hashable) -> list[T]:
        async with self.lock:
            if not self.discard(entity_id):
                logger.warning("Delete ignored: %s %s not found", self.kind, entity_id)
                return self.snapshot()
            await self.repository.delete(entity_id)
            logger.debug("Deleted %s %s", self.kind, entity_id)
            return self.snapshot()

    async def reload(self) -> None:
        """Re-read the contents from the repository (caller holds self.lock).

        Picks up changes written by other processes sharing the store.
        """
        self._items = await self.repository.load_all()

    async def persist(self, entity: T) -> None:
        """Upsert one entity without touching other stored rows (caller holds self.lock)."""
        await self.repository.save(entity)
