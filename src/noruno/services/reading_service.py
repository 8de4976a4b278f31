"""Reading service - books with embedded notes and reading sessions.

Notes and sessions are stored inside their book, so each of their mutations
refreshes the book's ``updated_at`` and persists the whole book. A missing
book, note or session id is a logged no-op.
"""

from __future__ import annotations

from collections.abc import Callable

from noruno.models import (
    ReadingBook,
    ReadingBookCreate,
    ReadingBookUpdate,
    ReadingNote,
    ReadingNoteInput,
    ReadingSession,
    ReadingSessionInput,
    ReadingStats,
)
from noruno.models.base import utc_now
from noruno.services.collection import EntityCollection, apply_update
from noruno.utils.logger import get_logger

logger = get_logger(__name__)


class ReadingService:
    """Service for the reading log."""

    def __init__(self, books: EntityCollection[ReadingBook]):
        self.books = books

    async def load(self) -> None:
        await self.books.load()

    async def list_books(self) -> list[ReadingBook]:
        return await self.books.list()

    async def get_book(self, book_id: str) -> ReadingBook | None:
        return await self.books.get(book_id)

    async def create_book(self, book_data: ReadingBookCreate) -> list[ReadingBook]:
        book = ReadingBook(**book_data.model_dump())
        book.recompute_progress()
        return await self.books.add(book)

    async def update_book(
        self, book_id: str, updates: ReadingBookUpdate
    ) -> list[ReadingBook]:
        """Apply metadata changes and recompute progress from page counts."""

        def mutate(book: ReadingBook) -> ReadingBook:
            updated = apply_update(book, updates)
            updated.recompute_progress()
            updated.updated_at = utc_now()
            return updated

        return await self.books.modify(book_id, mutate)

    async def delete_book(self, book_id: str) -> list[ReadingBook]:
        return await self.books.remove(book_id)

    async def _touch(
        self, book_id: str, change: Callable[[ReadingBook], bool]
    ) -> list[ReadingBook]:
        """Apply change to a book, refreshing updated_at when it reports a change."""

        def mutate(book: ReadingBook) -> None:
            if change(book):
                book.updated_at = utc_now()

        return await self.books.modify(book_id, mutate)

    # Notes

    async def add_note(self, book_id: str, note: ReadingNoteInput) -> list[ReadingBook]:
        def change(book: ReadingBook) -> bool:
            book.notes.append(ReadingNote(**note.model_dump()))
            return True

        return await self._touch(book_id, change)

    async def update_note(
        self, book_id: str, note_id: str, note: ReadingNoteInput
    ) -> list[ReadingBook]:
        """Replace a note's page, quote and comment (its id and date are kept)."""

        def change(book: ReadingBook) -> bool:
            existing = book.find_note(note_id)
            if existing is None:
                logger.warning("Note %s of book %s not found", note_id, book_id)
                return False
            existing.page_number = note.page_number
            existing.quote = note.quote
            existing.comment = note.comment
            return True

        return await self._touch(book_id, change)

    async def delete_note(self, book_id: str, note_id: str) -> list[ReadingBook]:
        def change(book: ReadingBook) -> bool:
            before = len(book.notes)
            book.notes = [n for n in book.notes if n.id != note_id]
            return len(book.notes) != before

        return await self._touch(book_id, change)

    # Sessions

    async def add_session(
        self, book_id: str, session: ReadingSessionInput
    ) -> list[ReadingBook]:
        def change(book: ReadingBook) -> bool:
            book.reading_sessions.append(ReadingSession(**session.model_dump()))
            return True

        return await self._touch(book_id, change)

    async def update_session(
        self, book_id: str, session_id: str, session: ReadingSessionInput
    ) -> list[ReadingBook]:
        def change(book: ReadingBook) -> bool:
            existing = book.find_session(session_id)
            if existing is None:
                logger.warning("Session %s of book %s not found", session_id, book_id)
                return False
            index = book.reading_sessions.index(existing)
            book.reading_sessions[index] = ReadingSession(
                id=session_id, **session.model_dump()
            )
            return True

        return await self._touch(book_id, change)

    async def delete_session(self, book_id: str, session_id: str) -> list[ReadingBook]:
        def change(book: ReadingBook) -> bool:
            before = len(book.reading_sessions)
            book.reading_sessions = [
                s for s in book.reading_sessions if s.id != session_id
            ]
            return len(book.reading_sessions) != before

        return await self._touch(book_id, change)

    async def reading_stats(self, book_id: str) -> ReadingStats | None:
        """Pages and minutes summed over a book's sessions (None if no such book)."""
        book = await self.books.get(book_id)
        if book is None:
            return None
        return ReadingStats(
            book_id=book.id,
            sessions=len(book.reading_sessions),
            pages_read=sum(s.pages_read for s in book.reading_sessions),
            minutes=sum(s.duration_minutes or 0 for s in book.reading_sessions),
            progress_percent=book.progress_percent,
        )
