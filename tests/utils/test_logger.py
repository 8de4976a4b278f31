"""Tests for the application logger utility."""

from __future__ import annotations

import logging

from noruno.utils.logger import get_logger, set_level


def test_get_logger_creates_log_file(isolated_dirs):
    logger = get_logger()

    assert (isolated_dirs / "logs" / "noruno.log").exists()
    assert isinstance(logger, logging.Logger)
    assert logger.name == "noruno"


def test_get_logger_returns_singleton():
    assert get_logger() is get_logger()


def test_named_logger_is_child_of_app_logger():
    child = get_logger("noruno.services.task_service")

    assert child.name == "noruno.services.task_service"
    assert child.parent is logging.getLogger("noruno")


def test_child_messages_reach_log_file(isolated_dirs):
    app_logger = get_logger()
    get_logger("tests").info("hello from test")

    for handler in app_logger.handlers:
        handler.flush()

    content = (isolated_dirs / "logs" / "noruno.log").read_text()
    assert "hello from test" in content
    assert "[noruno.tests]" in content


def test_set_level():
    set_level("WARNING")

    assert get_logger().level == logging.WARNING
