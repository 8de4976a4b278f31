"""JSON file implementation of the repositories.

Each entity kind is one pretty-printed JSON document in the data directory,
fully rewritten on every mutation. Writes go to a temporary file in the same
directory which then replaces the target, so a crash never leaves a partial
document behind. A missing file reads as an empty collection.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from noruno.models import MailSettings
from noruno.models.exceptions import PersistenceError
from noruno.repositories import (
    CollectionRepository,
    GroupRepository,
    SettingsRepository,
)
from noruno.utils.logger import get_logger

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def read_document(path: Path) -> Any | None:
    """Read a JSON document, returning None when the file does not exist.

    Raises:
        PersistenceError: If the file cannot be read or is not valid JSON
    """
    if not path.exists():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)
        raise PersistenceError(f"Failed to read {path}: {e}") from e


def write_document(path: Path, data: Any) -> None:
    """Atomically replace path with the pretty-printed JSON of data.

    Raises:
        PersistenceError: If the document cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to write %s: %s", path, e)
        raise PersistenceError(f"Failed to write {path}: {e}") from e


class JsonCollectionRepository(CollectionRepository[M]):
    """Stores a list of models as one JSON array document."""

    def __init__(self, path: str | Path, model: type[M]):
        self.path = Path(path)
        self.model = model
        self._adapter = TypeAdapter(list[model])

    async def load_all(self) -> list[M]:
        data = read_document(self.path)
        if data is None:
            return []
        try:
            return self._adapter.validate_python(data)
        except ValidationError as e:
            logger.error("Invalid data in %s: %s", self.path, e)
            raise PersistenceError(f"Invalid data in {self.path}: {e}") from e

    async def save_all(self, entities: list[M]) -> None:
        write_document(self.path, self._adapter.dump_python(entities, mode="json"))

    async def save(self, entity: M) -> None:
        entities = await self.load_all()
        entity_id = getattr(entity, "id")
        for index, existing in enumerate(entities):
            if getattr(existing, "id") == entity_id:
                entities[index] = entity
                break
        else:
            entities.append(entity)
        await self.save_all(entities)

    async def delete(self, entity_id: int | str) -> None:
        entities = await self.load_all()
        remaining = [e for e in entities if getattr(e, "id") != entity_id]
        if len(remaining) != len(entities):
            await self.save_all(remaining)


class JsonGroupRepository(GroupRepository):
    """Stores group names as a JSON array of strings."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def load_all(self) -> list[str]:
        data = read_document(self.path)
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(n, str) for n in data):
            raise PersistenceError(f"Invalid data in {self.path}: expected a list of names")
        return data

    async def save_all(self, names: list[str]) -> None:
        write_document(self.path, list(names))


class JsonSettingsRepository(SettingsRepository):
    """Stores the mail settings object."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def load(self) -> MailSettings:
        data = read_document(self.path)
        if data is None:
            return MailSettings()
        try:
            return MailSettings.model_validate(data)
        except ValidationError as e:
            logger.error("Invalid data in %s: %s", self.path, e)
            raise PersistenceError(f"Invalid data in {self.path}: {e}") from e

    async def save(self, settings: MailSettings) -> None:
        write_document(self.path, settings.model_dump(mode="json"))
