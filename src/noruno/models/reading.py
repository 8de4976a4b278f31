"""Reading log data models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from .base import new_id, utc_now


class ReadingStatus(str, Enum):
    """Reading status of a book."""

    WANT_TO_READ = "want_to_read"
    READING = "reading"
    FINISHED = "finished"
    PAUSED = "paused"

    @classmethod
    def parse(cls, value: str | None) -> ReadingStatus:
        """Parse a stored status, falling back to WANT_TO_READ."""
        try:
            return cls(value)
        except ValueError:
            return cls.WANT_TO_READ


class ReadingNote(BaseModel):
    """Note or quote attached to a book."""

    id: str = Field(default_factory=new_id)
    page_number: int | None = Field(default=None, ge=0)
    quote: str | None = None
    comment: str = ""
    created_at: datetime = Field(default_factory=utc_now)


class ReadingSession(BaseModel):
    """One sitting of reading (pages, duration) attached to a book."""

    id: str = Field(default_factory=new_id)
    session_date: datetime
    start_page: int | None = Field(default=None, ge=0)
    end_page: int | None = Field(default=None, ge=0)
    pages_read: int = Field(default=0, ge=0)
    duration_minutes: int | None = Field(default=None, ge=0)
    memo: str | None = None


class ReadingBook(BaseModel):
    """Book tracked in the reading log.

    Attributes:
        id: UUID identifier
        title: Book title
        author: Optional author
        isbn: Optional ISBN
        publisher: Optional publisher
        published_year: Optional publication year
        cover_image_url: Optional cover URL
        genres: Genre list
        status: Reading status
        start_date: When reading started
        finish_date: When reading finished
        progress_percent: Derived from page counts when both are known
        total_pages: Total page count
        current_page: Current page
        rating: Optional rating
        summary: Free-text summary
        notes: Embedded notes and quotes
        reading_sessions: Embedded reading sessions
        tags: Free-form tags
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str = Field(default_factory=new_id)
    title: str
    author: str | None = None
    isbn: str | None = None
    publisher: str | None = None
    published_year: int | None = None
    cover_image_url: str | None = None
    genres: list[str] = Field(default_factory=list)
    status: ReadingStatus = ReadingStatus.WANT_TO_READ
    start_date: datetime | None = None
    finish_date: datetime | None = None
    progress_percent: int | None = None
    total_pages: int | None = Field(default=None, ge=0)
    current_page: int | None = Field(default=None, ge=0)
    rating: int | None = Field(default=None, ge=0)
    summary: str = ""
    notes: list[ReadingNote] = Field(default_factory=list)
    reading_sessions: list[ReadingSession] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("status", mode="before")
    @classmethod
    def _lenient_status(cls, value):
        if isinstance(value, ReadingStatus):
            return value
        return ReadingStatus.parse(value)

    def recompute_progress(self) -> None:
        """Recompute progress_percent when both page counts are usable."""
        if self.total_pages is not None and self.current_page is not None:
            if self.total_pages > 0:
                self.progress_percent = self.current_page * 100 // self.total_pages

    def find_note(self, note_id: str) -> ReadingNote | None:
        return next((n for n in self.notes if n.id == note_id), None)

    def find_session(self, session_id: str) -> ReadingSession | None:
        return next((s for s in self.reading_sessions if s.id == session_id), None)


class ReadingBookCreate(BaseModel):
    """Model for creating a new book. Only the title is required."""

    title: str
    author: str | None = None
    isbn: str | None = None
    publisher: str | None = None
    published_year: int | None = None
    cover_image_url: str | None = None
    genres: list[str] = Field(default_factory=list)
    status: ReadingStatus = ReadingStatus.WANT_TO_READ
    total_pages: int | None = Field(default=None, ge=0)
    current_page: int | None = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)


class ReadingBookUpdate(BaseModel):
    """Model for updating book metadata. Unset fields are left untouched."""

    title: str | None = None
    author: str | None = None
    isbn: str | None = None
    publisher: str | None = None
    published_year: int | None = None
    cover_image_url: str | None = None
    genres: list[str] | None = None
    status: ReadingStatus | None = None
    start_date: datetime | None = None
    finish_date: datetime | None = None
    total_pages: int | None = Field(default=None, ge=0)
    current_page: int | None = Field(default=None, ge=0)
    rating: int | None = Field(default=None, ge=0)
    summary: str | None = None
    tags: list[str] | None = None


class ReadingNoteInput(BaseModel):
    """Fields of a note supplied by the caller."""

    page_number: int | None = Field(default=None, ge=0)
    quote: str | None = None
    comment: str = ""


class ReadingSessionInput(BaseModel):
    """Fields of a reading session supplied by the caller."""

    session_date: datetime = Field(default_factory=utc_now)
    start_page: int | None = Field(default=None, ge=0)
    end_page: int | None = Field(default=None, ge=0)
    pages_read: int = Field(default=0, ge=0)
    duration_minutes: int | None = Field(default=None, ge=0)
    memo: str | None = None


class ReadingStats(BaseModel):
    """Totals across a book's reading sessions."""

    book_id: str
    sessions: int = 0
    pages_read: int = 0
    minutes: int = 0
    progress_percent: int | None = None
