"""SQLite implementation of the reading log repository.

Notes and sessions are embedded in the book row as JSON, so every note or
session mutation rewrites the whole book.
"""

from __future__ import annotations

from noruno.adapters.sqlite.base_repository import SqliteCollectionRepository
from noruno.models import ReadingBook


class SqliteReadingBookRepository(SqliteCollectionRepository[ReadingBook]):
    model = ReadingBook
    table = "reading_books"
    columns = [
        "id",
        "title",
        "author",
        "isbn",
        "publisher",
        "published_year",
        "cover_image_url",
        "genres",
        "status",
        "start_date",
        "finish_date",
        "progress_percent",
        "total_pages",
        "current_page",
        "rating",
        "summary",
        "notes",
        "reading_sessions",
        "tags",
        "created_at",
        "updated_at",
    ]
    json_columns = frozenset({"genres", "notes", "reading_sessions", "tags"})
