"""Reading log commands: books, notes and reading sessions."""

from datetime import datetime

import typer

from noruno.models import (
    ReadingBookCreate,
    ReadingBookUpdate,
    ReadingNoteInput,
    ReadingSessionInput,
    ReadingStatus,
)
from noruno.models.base import utc_now
from noruno.utils.typer_helpers import SuggestingGroup
from noruno.utils.ui.formatters import format_output, format_success

from .context import OutputOption, dump, open_app_context, require
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Reading log commands")
notes_app = typer.Typer(cls=SuggestingGroup, help="Book note and quote commands")
sessions_app = typer.Typer(cls=SuggestingGroup, help="Reading session commands")


@app.command("list")
@command_wrapper
async def list_books(
    status: ReadingStatus | None = typer.Option(None, "--status", "-s", help="Filter by status"),
    output: str = OutputOption,
) -> None:
    """List books."""
    async with open_app_context() as ctx:
        books = await ctx.reading.list_books()
    if status is not None:
        books = [b for b in books if b.status == status]
    format_output(dump(books), output)


@app.command("get")
@command_wrapper
async def get_book(
    book_id: str = typer.Argument(..., help="Book ID"),
    output: str = OutputOption,
) -> None:
    """Show one book with its notes and sessions."""
    async with open_app_context() as ctx:
        book = require(await ctx.reading.get_book(book_id), "Book", book_id)
    format_output(book.model_dump(mode="json"), output)


@app.command("create")
@command_wrapper
async def create_book(
    title: str = typer.Argument(..., help="Book title"),
    author: str | None = typer.Option(None, "--author", "-a", help="Author"),
    isbn: str | None = typer.Option(None, "--isbn", help="ISBN"),
    pages: int | None = typer.Option(None, "--pages", help="Total pages", min=0),
    status: ReadingStatus = typer.Option(ReadingStatus.WANT_TO_READ, "--status", "-s", help="Reading status"),
    genres: list[str] | None = typer.Option(None, "--genre", help="Genre (repeatable)"),
    tags: list[str] | None = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    output: str = OutputOption,
) -> None:
    """Add a book to the reading log."""
    data = ReadingBookCreate(
        title=title,
        author=author,
        isbn=isbn,
        total_pages=pages,
        status=status,
        genres=genres or [],
        tags=tags or [],
    )
    async with open_app_context() as ctx:
        books = await ctx.reading.create_book(data)
    format_success(f"Book created: {books[-1].id}")
    format_output(dump(books), output)


@app.command("update")
@command_wrapper
async def update_book(
    book_id: str = typer.Argument(..., help="Book ID"),
    title: str | None = typer.Option(None, "--title", help="Title"),
    author: str | None = typer.Option(None, "--author", "-a", help="Author"),
    status: ReadingStatus | None = typer.Option(None, "--status", "-s", help="Reading status"),
    pages: int | None = typer.Option(None, "--pages", help="Total pages", min=0),
    page: int | None = typer.Option(None, "--page", help="Current page", min=0),
    rating: int | None = typer.Option(None, "--rating", help="Rating", min=0),
    summary: str | None = typer.Option(None, "--summary", help="Summary"),
    started: datetime | None = typer.Option(None, "--started", help="Start date"),
    finished: datetime | None = typer.Option(None, "--finished", help="Finish date"),
    tags: list[str] | None = typer.Option(None, "--tag", "-t", help="Replace tags"),
    output: str = OutputOption,
) -> None:
    """Update book metadata. Progress is recomputed from page counts."""
    fields = {
        "title": title,
        "author": author,
        "status": status,
        "total_pages": pages,
        "current_page": page,
        "rating": rating,
        "summary": summary,
        "start_date": started,
        "finish_date": finished,
        "tags": tags or None,
    }
    changes = {key: value for key, value in fields.items() if value is not None}
    async with open_app_context() as ctx:
        require(await ctx.reading.get_book(book_id), "Book", book_id)
        books = await ctx.reading.update_book(book_id, ReadingBookUpdate(**changes))
    format_output(dump(books), output)


@app.command("delete")
@command_wrapper
async def delete_book(
    book_id: str = typer.Argument(..., help="Book ID"),
    output: str = OutputOption,
) -> None:
    """Delete a book with its notes and sessions."""
    async with open_app_context() as ctx:
        books = await ctx.reading.delete_book(book_id)
    format_output(dump(books), output)


@app.command("stats")
@command_wrapper
async def book_stats(
    book_id: str = typer.Argument(..., help="Book ID"),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show pages and minutes read for a book."""
    async with open_app_context() as ctx:
        stats = require(await ctx.reading.reading_stats(book_id), "Book", book_id)
    format_output(stats.model_dump(), output)


@notes_app.command("add")
@command_wrapper
async def add_note(
    book_id: str = typer.Argument(..., help="Book ID"),
    comment: str = typer.Option("", "--comment", "-c", help="Comment"),
    quote: str | None = typer.Option(None, "--quote", "-q", help="Quoted passage"),
    page: int | None = typer.Option(None, "--page", help="Page number", min=0),
    output: str = OutputOption,
) -> None:
    """Attach a note or quote to a book."""
    note = ReadingNoteInput(page_number=page, quote=quote, comment=comment)
    async with open_app_context() as ctx:
        require(await ctx.reading.get_book(book_id), "Book", book_id)
        books = await ctx.reading.add_note(book_id, note)
    format_output(dump(books), output)


@notes_app.command("update")
@command_wrapper
async def update_note(
    book_id: str = typer.Argument(..., help="Book ID"),
    note_id: str = typer.Argument(..., help="Note ID"),
    comment: str = typer.Option("", "--comment", "-c", help="Comment"),
    quote: str | None = typer.Option(None, "--quote", "-q", help="Quoted passage"),
    page: int | None = typer.Option(None, "--page", help="Page number", min=0),
    output: str = OutputOption,
) -> None:
    """Replace a note's page, quote and comment."""
    note = ReadingNoteInput(page_number=page, quote=quote, comment=comment)
    async with open_app_context() as ctx:
        books = await ctx.reading.update_note(book_id, note_id, note)
    format_output(dump(books), output)


@notes_app.command("delete")
@command_wrapper
async def delete_note(
    book_id: str = typer.Argument(..., help="Book ID"),
    note_id: str = typer.Argument(..., help="Note ID"),
    output: str = OutputOption,
) -> None:
    """Delete a note."""
    async with open_app_context() as ctx:
        books = await ctx.reading.delete_note(book_id, note_id)
    format_output(dump(books), output)


def _session_input(
    date: datetime | None,
    start_page: int | None,
    end_page: int | None,
    pages: int | None,
    minutes: int | None,
    memo: str | None,
) -> ReadingSessionInput:
    if pages is None and start_page is not None and end_page is not None:
        pages = max(0, end_page - start_page)
    return ReadingSessionInput(
        session_date=date or utc_now(),
        start_page=start_page,
        end_page=end_page,
        pages_read=pages or 0,
        duration_minutes=minutes,
        memo=memo,
    )


@sessions_app.command("add")
@command_wrapper
async def add_session(
    book_id: str = typer.Argument(..., help="Book ID"),
    date: datetime | None = typer.Option(None, "--date", help="Session date (default now)"),
    start_page: int | None = typer.Option(None, "--from-page", help="First page", min=0),
    end_page: int | None = typer.Option(None, "--to-page", help="Last page", min=0),
    pages: int | None = typer.Option(None, "--pages", help="Pages read", min=0),
    minutes: int | None = typer.Option(None, "--minutes", "-m", help="Duration in minutes", min=0),
    memo: str | None = typer.Option(None, "--memo", help="Short memo"),
    output: str = OutputOption,
) -> None:
    """Log a reading session."""
    session = _session_input(date, start_page, end_page, pages, minutes, memo)
    async with open_app_context() as ctx:
        require(await ctx.reading.get_book(book_id), "Book", book_id)
        books = await ctx.reading.add_session(book_id, session)
    format_output(dump(books), output)


@sessions_app.command("update")
@command_wrapper
async def update_session(
    book_id: str = typer.Argument(..., help="Book ID"),
    session_id: str = typer.Argument(..., help="Session ID"),
    date: datetime | None = typer.Option(None, "--date", help="Session date (default now)"),
    start_page: int | None = typer.Option(None, "--from-page", help="First page", min=0),
    end_page: int | None = typer.Option(None, "--to-page", help="Last page", min=0),
    pages: int | None = typer.Option(None, "--pages", help="Pages read", min=0),
    minutes: int | None = typer.Option(None, "--minutes", "-m", help="Duration in minutes", min=0),
    memo: str | None = typer.Option(None, "--memo", help="Short memo"),
    output: str = OutputOption,
) -> None:
    """Replace a reading session."""
    session = _session_input(date, start_page, end_page, pages, minutes, memo)
    async with open_app_context() as ctx:
        books = await ctx.reading.update_session(book_id, session_id, session)
    format_output(dump(books), output)


@sessions_app.command("delete")
@command_wrapper
async def delete_session(
    book_id: str = typer.Argument(..., help="Book ID"),
    session_id: str = typer.Argument(..., help="Session ID"),
    output: str = OutputOption,
) -> None:
    """Delete a reading session."""
    async with open_app_context() as ctx:
        books = await ctx.reading.delete_session(book_id, session_id)
    format_output(dump(books), output)
