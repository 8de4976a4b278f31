"""Repository interfaces for Noruno.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- noruno.adapters.sqlite (single database file)
- noruno.adapters.json_file (one JSON document per kind)
"""

from .repository import CollectionRepository, GroupRepository, SettingsRepository

__all__ = [
    "CollectionRepository",
    "GroupRepository",
    "SettingsRepository",
]
