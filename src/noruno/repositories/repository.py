"""Repository abstraction layer for Noruno.

This module defines the abstract base classes (interfaces) for persistence,
following the hexagonal architecture (Ports & Adapters) pattern.

Every entity kind is held in memory by the services; repositories only load
the full collection at startup and write changes back. Concrete adapters live
in ``noruno.adapters.sqlite`` and ``noruno.adapters.json_file``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from noruno.models import MailSettings

T = TypeVar("T")


class CollectionRepository(ABC, Generic[T]):
    """Abstract base class for persisting one entity kind.

    Implementations must raise ``PersistenceError`` for any storage failure.
    """

    @abstractmethod
    async def load_all(self) -> list[T]:
        """Load every stored entity, in storage order.

        Returns:
            List of entities (empty when nothing is stored yet)

        Raises:
            PersistenceError: If the backend cannot be read
        """
        raise NotImplementedError(
            "CollectionRepository.load_all() must be implemented by adapter"
        )

    @abstractmethod
    async def save(self, entity: T) -> None:
        """Insert or replace a single entity (upsert by id).

        Raises:
            PersistenceError: If the write fails
        """
        raise NotImplementedError(
            "CollectionRepository.save() must be implemented by adapter"
        )

    @abstractmethod
    async def save_all(self, entities: list[T]) -> None:
        """Replace the stored collection with exactly ``entities``.

        Raises:
            PersistenceError: If the write fails
        """
        raise NotImplementedError(
            "CollectionRepository.save_all() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, entity_id: int | str) -> None:
        """Delete an entity by id. Deleting a missing id is not an error.

        Raises:
            PersistenceError: If the write fails
        """
        raise NotImplementedError(
            "CollectionRepository.delete() must be implemented by adapter"
        )


class GroupRepository(ABC):
    """Abstract base class for the list of task group names."""

    @abstractmethod
    async def load_all(self) -> list[str]:
        """Load group names in creation order."""
        raise NotImplementedError(
            "GroupRepository.load_all() must be implemented by adapter"
        )

    @abstractmethod
    async def save_all(self, names: list[str]) -> None:
        """Replace the stored group names."""
        raise NotImplementedError(
            "GroupRepository.save_all() must be implemented by adapter"
        )


class SettingsRepository(ABC):
    """Abstract base class for the mail settings record."""

    @abstractmethod
    async def load(self) -> MailSettings:
        """Load settings, returning defaults when none are stored."""
        raise NotImplementedError(
            "SettingsRepository.load() must be implemented by adapter"
        )

    @abstractmethod
    async def save(self, settings: MailSettings) -> None:
        """Persist settings."""
        raise NotImplementedError(
            "SettingsRepository.save() must be implemented by adapter"
        )
