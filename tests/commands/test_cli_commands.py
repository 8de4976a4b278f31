"""End-to-end tests for the noruno CLI."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from noruno import __version__
from noruno.main import app

runner = CliRunner()


def invoke(*args: str):
    return runner.invoke(app, list(args))


def json_output(*args: str):
    result = invoke(*args, "-o", "json")
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def last_line(result) -> str:
    return result.output.strip().splitlines()[-1]


@pytest.fixture
def json_backend():
    result = invoke("config", "set-backend", "json")
    assert result.exit_code == 0, result.output


class TestVersion:
    def test_version_output(self):
        result = invoke("version")
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_unknown_command_suggests(self):
        result = invoke("taks")
        assert result.exit_code == 2
        assert "tasks" in result.output


class TestTasks:
    def test_add_then_list(self):
        result = invoke("tasks", "add", "Pay rent", "--due", "2025-01-01 10:00", "--group", "Home")
        assert result.exit_code == 0, result.output
        assert "Task created: 1" in result.output

        tasks = json_output("tasks", "list")
        assert [(t["id"], t["description"], t["group"]) for t in tasks] == [(1, "Pay rent", "Home")]

    def test_markup_like_description_is_listed_verbatim(self):
        result = invoke("tasks", "add", "notes [/x]", "--due", "2025-01-01")
        assert result.exit_code == 0, result.output

        result = invoke("tasks", "list")
        assert result.exit_code == 0, result.output
        assert "notes [/x]" in result.output

    def test_data_persists_on_json_backend(self, json_backend, isolated_dirs):
        invoke("tasks", "add", "Pay rent", "--due", "2025-01-01")

        assert (isolated_dirs / "data" / "tasks.json").exists()
        assert [t["id"] for t in json_output("tasks", "list")] == [1]

    def test_update_and_complete(self):
        invoke("tasks", "add", "Pay rent", "--due", "2025-01-01", "--details", "landlord")

        result = invoke("tasks", "update", "1", "--description", "Pay bills", "--remind", "30")
        assert result.exit_code == 0, result.output
        result = invoke("tasks", "complete", "1")
        assert result.exit_code == 0, result.output

        task = json_output("tasks", "get", "1")
        assert task["description"] == "Pay bills"
        assert task["details"] == "landlord"
        assert task["notification_minutes"] == 30
        assert task["completed"] is True

    def test_filters(self):
        invoke("tasks", "add", "a", "--due", "2025-01-01", "--group", "Work")
        invoke("tasks", "add", "b", "--due", "2025-01-01")
        invoke("tasks", "complete", "1")

        assert json_output("tasks", "list", "--group", "Work")[0]["description"] == "a"
        assert [t["description"] for t in json_output("tasks", "list", "--pending")] == ["b"]

    def test_pretty_list(self):
        invoke("tasks", "add", "Pay rent", "--due", "2025-01-01", "--group", "Home")
        invoke("subtasks", "add", "1", "find checkbook")

        result = invoke("tasks", "list")

        assert result.exit_code == 0, result.output
        assert "Pay rent" in result.output
        assert "find checkbook" in result.output

    def test_get_missing_exits_not_found(self):
        result = invoke("tasks", "get", "9")
        assert result.exit_code == 5
        assert "Task not found: 9" in result.output

    def test_update_missing_exits_not_found(self):
        result = invoke("tasks", "update", "9", "--details", "x")
        assert result.exit_code == 5

    def test_subtasks(self):
        invoke("tasks", "add", "Move", "--due", "2025-03-01")
        invoke("subtasks", "add", "1", "pack")
        invoke("subtasks", "add", "1", "book van")
        invoke("subtasks", "toggle", "1", "2")

        subtasks = json_output("tasks", "get", "1")["subtasks"]
        assert [(s["id"], s["completed"]) for s in subtasks] == [(1, False), (2, True)]

    def test_stats(self):
        invoke("tasks", "add", "a", "--due", "2000-01-01")
        stats = json_output("tasks", "stats")
        assert stats["total"] == 1
        assert stats["overdue"] == 1


class TestGroups:
    def test_create_rename_delete(self):
        invoke("groups", "create", "Work")
        invoke("tasks", "add", "report", "--due", "2025-01-01", "--group", "Work")

        assert json_output("groups", "rename", "Work", "Office") == ["Office"]
        assert json_output("tasks", "get", "1")["group"] == "Office"
        assert json_output("groups", "delete", "Office") == []
        assert json_output("tasks", "get", "1")["group"] == ""


class TestMemosAndFolders:
    def test_folder_delete_unfiles_memo(self):
        result = invoke("folders", "create", "Work", "-o", "quiet")
        folder_id = last_line(result)
        invoke("memos", "create", "Plan", "--folder", folder_id, "--tag", "q1")

        assert len(json_output("memos", "list", "--folder", folder_id)) == 1

        result = invoke("folders", "delete", folder_id)
        assert result.exit_code == 0, result.output
        (memo,) = json_output("memos", "list")
        assert memo["folder_id"] is None

    def test_search_and_tags(self):
        invoke("memos", "create", "Groceries", "--content", "milk", "--tag", "home")
        invoke("memos", "create", "Trip", "--tag", "travel", "--tag", "home")

        assert [m["title"] for m in json_output("memos", "search", "MILK")] == ["Groceries"]
        assert json_output("memos", "tags") == ["home", "travel"]

    def test_folder_cycle_is_rejected(self):
        parent = last_line(invoke("folders", "create", "Parent", "-o", "quiet"))
        child = last_line(
            invoke("folders", "create", "Child", "--parent", parent, "-o", "quiet")
        )

        result = invoke("folders", "update", parent, "--parent", child)

        assert result.exit_code == 2


class TestBooksAndEvents:
    def test_book_with_session(self):
        book_id = last_line(invoke("books", "create", "Dune", "--pages", "400", "-o", "quiet"))

        result = invoke(
            "sessions", "add", book_id, "--from-page", "1", "--to-page", "51", "--minutes", "45"
        )
        assert result.exit_code == 0, result.output

        stats = json_output("books", "stats", book_id)
        assert stats["sessions"] == 1
        assert stats["pages_read"] == 50
        assert stats["minutes"] == 45

    def test_events_range(self):
        invoke("events", "create", "Dentist", "--start", "2025-02-03 14:00")
        invoke("events", "create", "Standup", "--start", "2025-03-01", "--all-day")

        events = json_output("events", "list", "--from", "2025-02-01", "--to", "2025-02-28")
        assert [e["title"] for e in events] == ["Dentist"]


class TestMail:
    def test_check_unconfigured_exits_invalid_args(self):
        result = invoke("mail", "check")
        assert result.exit_code == 2
        assert "not configured" in result.output

    def test_set_masks_password(self):
        result = invoke("mail", "set", "--email", "me@example.com", "--password", "secret")
        assert result.exit_code == 0, result.output
        assert "secret" not in result.output

        settings = json_output("mail", "show")
        assert settings == {
            "email": "me@example.com",
            "app_password": "********",
            "notification_minutes": 1440,
        }

    def test_check_with_nothing_due(self):
        invoke("mail", "set", "--email", "me@example.com", "--password", "pw")

        result = invoke("mail", "check")

        assert result.exit_code == 0, result.output
        assert "Sent 0 email(s)." in result.output
        assert "Total tasks: 0" in result.output

    def test_test_email_uses_smtp(self, mocker):
        smtp = mocker.patch("noruno.services.mail_service.smtplib.SMTP_SSL")
        invoke("mail", "set", "--email", "me@example.com", "--password", "pw")

        result = invoke("mail", "test")

        assert result.exit_code == 0, result.output
        assert "Email sent successfully" in result.output
        smtp.return_value.login.assert_called_once_with("me@example.com", "pw")

    def test_test_email_transport_failure_exits_network(self, mocker):
        mocker.patch(
            "noruno.services.mail_service.smtplib.SMTP_SSL",
            side_effect=OSError("unreachable"),
        )
        invoke("mail", "set", "--email", "me@example.com", "--password", "pw")

        assert invoke("mail", "test").exit_code == 4


class TestConfig:
    def test_set_backend_rejects_unknown(self):
        result = invoke("config", "set-backend", "mongo")
        assert result.exit_code == 2

    def test_show_yaml(self):
        result = invoke("config", "show")
        assert result.exit_code == 0
        assert "backend: sqlite" in result.output

    def test_reset(self, json_backend):
        assert invoke("config", "reset", "--yes").exit_code == 0
        assert "backend: sqlite" in invoke("config", "show").output
