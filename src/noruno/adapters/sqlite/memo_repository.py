"""SQLite implementations of the memo and folder repositories."""

from __future__ import annotations

from noruno.adapters.sqlite.base_repository import SqliteCollectionRepository
from noruno.models import Folder, Memo


class SqliteMemoRepository(SqliteCollectionRepository[Memo]):
    """SQLite implementation of memo repository."""

    model = Memo
    table = "memos"
    columns = [
        "id",
        "title",
        "content",
        "folder_id",
        "tags",
        "created_at",
        "updated_at",
    ]
    json_columns = frozenset({"tags"})


class SqliteFolderRepository(SqliteCollectionRepository[Folder]):
    """SQLite implementation of folder repository."""

    model = Folder
    table = "folders"
    columns = ["id", "name", "parent_id"]
