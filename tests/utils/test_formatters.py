"""Tests for output formatters."""

from __future__ import annotations

import json

import yaml

from noruno.utils.ui.formatters import format_output, get_progress_bar

TASKS = [
    {
        "id": 1,
        "description": "Pay rent",
        "due_date": "2025-01-01 10:00",
        "group": "Home",
        "completed": False,
        "notified": True,
        "subtasks": [{"id": 1, "description": "find checkbook", "completed": True}],
    }
]


def test_json(capsys):
    format_output(TASKS, "json")
    assert json.loads(capsys.readouterr().out) == TASKS


def test_yaml(capsys):
    format_output({"email": "me@example.com", "notification_minutes": 30}, "yaml")
    assert yaml.safe_load(capsys.readouterr().out) == {
        "email": "me@example.com",
        "notification_minutes": 30,
    }


def test_quiet_prints_ids(capsys):
    format_output([{"id": "a"}, {"id": "b"}], "quiet")
    assert capsys.readouterr().out.split() == ["a", "b"]


def test_pretty_tasks(capsys):
    format_output(TASKS, "pretty")
    out = capsys.readouterr().out
    assert "Pay rent" in out
    assert "#Home" in out
    assert "find checkbook" in out


def test_pretty_compact_hides_subtasks(capsys):
    format_output(TASKS, "pretty", compact=True)
    assert "find checkbook" not in capsys.readouterr().out


def test_table_empty(capsys):
    format_output([], "table")
    assert "No items found" in capsys.readouterr().out


def test_progress_bar():
    assert get_progress_bar(0) == "░" * 10
    assert get_progress_bar(45) == "▓" * 4 + "░" * 6
    assert get_progress_bar(150) == "▓" * 10


def test_markup_like_text_is_printed_literally(capsys):
    task = dict(TASKS[0], description="notes [/x]", subtasks=[
        {"id": 1, "description": "[bold]sub", "completed": False}
    ])
    format_output([task], "pretty")
    format_output([{"id": "e1", "title": "[red]", "start_datetime": "2025-01-01T10:00"}], "pretty")
    format_output([{"id": "f1", "name": "inbox [/]"}], "pretty")
    format_output({"title": "a [/b]"}, "table")

    out = capsys.readouterr().out
    assert "notes [/x]" in out
    assert "[bold]sub" in out
    assert "[red]" in out
    assert "inbox [/]" in out
    assert "a [/b]" in out
