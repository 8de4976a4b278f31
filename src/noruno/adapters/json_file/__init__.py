"""JSON file adapter module - one document per entity kind."""

from noruno.adapters.json_file.store import (
    JsonCollectionRepository,
    JsonGroupRepository,
    JsonSettingsRepository,
)

__all__ = [
    "JsonCollectionRepository",
    "JsonGroupRepository",
    "JsonSettingsRepository",
]
