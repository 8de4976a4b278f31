"""Tests for the SQLite repositories, using an in-memory database."""

from __future__ import annotations

import sqlite3

import pytest

from noruno.adapters.sqlite import (
    DatabaseConnection,
    SqliteCalendarEventRepository,
    SqliteFolderRepository,
    SqliteGroupRepository,
    SqliteMemoRepository,
    SqliteReadingBookRepository,
    SqliteSettingsRepository,
    SqliteTaskRepository,
)
from noruno.adapters.sqlite.connection import MEMORY_DB
from noruno.adapters.sqlite.utils import build_upsert
from noruno.models import (
    CalendarEvent,
    Folder,
    MailSettings,
    Memo,
    ReadingBook,
    ReadingSession,
    Subtask,
    Task,
)
from noruno.models.exceptions import PersistenceError


def _task(task_id: int, **kwargs) -> Task:
    defaults = {"description": f"task {task_id}", "due_date": "2025-01-01 10:00"}
    defaults.update(kwargs)
    return Task(id=task_id, **defaults)


@pytest.fixture
def connection() -> sqlite3.Connection:
    return DatabaseConnection.get_connection(MEMORY_DB)


@pytest.fixture
def task_repo(connection) -> SqliteTaskRepository:
    return SqliteTaskRepository(MEMORY_DB)


class TestTaskRepository:
    @pytest.mark.asyncio
    async def test_empty_database(self, task_repo):
        assert await task_repo.load_all() == []

    @pytest.mark.asyncio
    async def test_save_and_load_round_trip(self, task_repo):
        task = _task(
            1,
            group="Work",
            details="quarterly numbers",
            notification_minutes=30,
            subtasks=[Subtask(id=1, description="draft", completed=True)],
            dependencies=[2],
        )
        await task_repo.save(task)

        assert await task_repo.load_all() == [task]

    @pytest.mark.asyncio
    async def test_group_is_stored_in_group_name_column(self, task_repo, connection):
        await task_repo.save(_task(1, group="Home"))

        row = connection.execute("SELECT group_name FROM tasks WHERE id = 1").fetchone()
        assert row["group_name"] == "Home"

    @pytest.mark.asyncio
    async def test_save_upserts_existing_row(self, task_repo):
        await task_repo.save(_task(1))
        await task_repo.save(_task(1, description="renamed", notified=True))

        tasks = await task_repo.load_all()
        assert len(tasks) == 1
        assert tasks[0].description == "renamed"
        assert tasks[0].notified is True

    @pytest.mark.asyncio
    async def test_load_keeps_insertion_order(self, task_repo):
        for task_id in (3, 1, 2):
            await task_repo.save(_task(task_id))

        assert [t.id for t in await task_repo.load_all()] == [3, 1, 2]

    @pytest.mark.asyncio
    async def test_save_all_replaces_collection(self, task_repo):
        await task_repo.save(_task(1))
        await task_repo.save(_task(2))

        await task_repo.save_all([_task(2, notified=True), _task(3)])

        tasks = await task_repo.load_all()
        assert [t.id for t in tasks] == [2, 3]
        assert tasks[0].notified is True

    @pytest.mark.asyncio
    async def test_save_all_empty_clears_table(self, task_repo):
        await task_repo.save(_task(1))
        await task_repo.save_all([])
        assert await task_repo.load_all() == []

    @pytest.mark.asyncio
    async def test_delete(self, task_repo):
        await task_repo.save(_task(1))
        await task_repo.save(_task(2))

        await task_repo.delete(1)
        await task_repo.delete(99)

        assert [t.id for t in await task_repo.load_all()] == [2]

    @pytest.mark.asyncio
    async def test_corrupt_json_column_raises_persistence_error(self, task_repo, connection):
        connection.execute(
            "INSERT INTO tasks (id, description, due_date, subtasks) VALUES (?, ?, ?, ?)",
            (1, "broken", "2025-01-01", "{not json"),
        )
        connection.commit()

        with pytest.raises(PersistenceError):
            await task_repo.load_all()


class TestOtherCollections:
    @pytest.mark.asyncio
    async def test_memo_round_trip(self, connection):
        repo = SqliteMemoRepository(MEMORY_DB)
        memo = Memo(title="Ideas", content="…", tags=["a", "b"], folder_id="f1")
        await repo.save(memo)
        assert await repo.load_all() == [memo]

    @pytest.mark.asyncio
    async def test_folder_round_trip(self, connection):
        repo = SqliteFolderRepository(MEMORY_DB)
        root = Folder(name="Root")
        child = Folder(name="Child", parent_id=root.id)
        await repo.save_all([root, child])
        assert await repo.load_all() == [root, child]

    @pytest.mark.asyncio
    async def test_reading_book_round_trip(self, connection):
        repo = SqliteReadingBookRepository(MEMORY_DB)
        book = ReadingBook(
            title="Dune",
            genres=["sf"],
            status="reading",
            total_pages=600,
            current_page=150,
            reading_sessions=[
                ReadingSession(session_date="2025-01-01T20:00:00Z", pages_read=30)
            ],
        )
        await repo.save(book)
        assert await repo.load_all() == [book]

    @pytest.mark.asyncio
    async def test_calendar_event_round_trip(self, connection):
        repo = SqliteCalendarEventRepository(MEMORY_DB)
        event = CalendarEvent(
            title="Dentist", start_datetime="2025-02-03 14:00", all_day=False
        )
        await repo.save(event)
        assert await repo.load_all() == [event]


class TestGroupRepository:
    @pytest.mark.asyncio
    async def test_order_is_preserved(self, connection):
        repo = SqliteGroupRepository(MEMORY_DB)
        await repo.save_all(["Work", "Home", "Errands"])
        assert await repo.load_all() == ["Work", "Home", "Errands"]

    @pytest.mark.asyncio
    async def test_save_all_replaces(self, connection):
        repo = SqliteGroupRepository(MEMORY_DB)
        await repo.save_all(["Work", "Home"])
        await repo.save_all(["Home"])
        assert await repo.load_all() == ["Home"]


class TestSettingsRepository:
    @pytest.mark.asyncio
    async def test_defaults_when_missing(self, connection):
        repo = SqliteSettingsRepository(MEMORY_DB)
        assert await repo.load() == MailSettings()

    @pytest.mark.asyncio
    async def test_save_overwrites(self, connection):
        repo = SqliteSettingsRepository(MEMORY_DB)
        await repo.save(MailSettings(email="a@b.c", app_password="x"))
        await repo.save(MailSettings(email="d@e.f", app_password="y", notification_minutes=5))

        assert await repo.load() == MailSettings(
            email="d@e.f", app_password="y", notification_minutes=5
        )
        count = connection.execute("SELECT COUNT(*) FROM settings").fetchone()[0]
        assert count == 1


class TestConnection:
    def test_connection_is_reused_for_same_path(self):
        first = DatabaseConnection.get_connection(MEMORY_DB)
        assert DatabaseConnection.get_connection(MEMORY_DB) is first
        assert DatabaseConnection.get_db_path() == MEMORY_DB

    def test_file_database_is_created_with_schema(self, tmp_path):
        db_path = tmp_path / "nested" / "noruno.db"
        connection = DatabaseConnection.get_connection(db_path)

        assert db_path.exists()
        tables = {
            row[0]
            for row in connection.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            ).fetchall()
        }
        assert {"tasks", "groups", "settings", "memos", "folders"} <= tables
        assert {"reading_books", "calendar_events", "schema_version"} <= tables

    def test_close_connection(self):
        DatabaseConnection.get_connection(MEMORY_DB)
        DatabaseConnection.close_connection()
        assert DatabaseConnection.get_db_path() is None

    def test_unopenable_path_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(PersistenceError):
            DatabaseConnection.get_connection(blocker / "noruno.db")


def test_build_upsert():
    sql = build_upsert("groups", ["name", "position"], key="name")
    assert sql == (
        "INSERT INTO groups (name, position) VALUES (?, ?) "
        "ON CONFLICT(name) DO UPDATE SET position = excluded.position"
    )
