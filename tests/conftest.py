"""Shared test fixtures and configuration.

Isolates every test from the real config, data and log directories.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest
import pytest_asyncio

from noruno.adapters.sqlite.connection import DatabaseConnection
from noruno.models import MailSettings
from noruno.models.config_models import AppConfig, StorageConfig
from noruno.models.exceptions import TransportError
from noruno.services.app_context import create_app_context
from noruno.services.mail_service import MailSender


# ---------------------------------------------------------------------------
# Directory isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point platformdirs lookups at tmp_path and reset process singletons."""
    import noruno.utils.logger as logger_mod
    from noruno.services.config_service import get_config_service

    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")
    log_dir = str(tmp_path / "logs")

    get_config_service.cache_clear()
    with (
        patch("noruno.services.config_service.user_config_dir", return_value=config_dir),
        patch("noruno.services.config_service.user_data_dir", return_value=data_dir),
        patch("noruno.adapters.sqlite.connection.user_data_dir", return_value=data_dir),
        patch("noruno.utils.logger.user_log_dir", return_value=log_dir),
    ):
        yield tmp_path

    DatabaseConnection.close_connection()
    get_config_service.cache_clear()
    app_logger = logging.getLogger("noruno")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.propagate = True
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Mail
# ---------------------------------------------------------------------------


class RecordingMailSender(MailSender):
    """MailSender that records messages instead of sending them."""

    def __init__(self, fail_subjects: tuple[str, ...] = ()):
        self.sent: list[dict] = []
        self.fail_subjects = fail_subjects

    async def send(self, sender: str, recipient: str, subject: str, body: str) -> None:
        if any(fragment in subject for fragment in self.fail_subjects):
            raise TransportError("connection refused")
        self.sent.append(
            {"sender": sender, "recipient": recipient, "subject": subject, "body": body}
        )


@pytest.fixture
def mail_sender() -> RecordingMailSender:
    return RecordingMailSender()


@pytest.fixture
def configured_settings() -> MailSettings:
    return MailSettings(email="me@example.com", app_password="app-pass", notification_minutes=30)


# ---------------------------------------------------------------------------
# App context on both backends
# ---------------------------------------------------------------------------


def make_config(tmp_path, backend: str) -> AppConfig:
    return AppConfig(storage=StorageConfig(backend=backend, data_dir=str(tmp_path / backend)))


@pytest.fixture(params=["sqlite", "json"])
def backend(request) -> str:
    return request.param


@pytest.fixture
def app_config(tmp_path, backend) -> AppConfig:
    return make_config(tmp_path, backend)


@pytest_asyncio.fixture
async def ctx(app_config, mail_sender):
    """AppContext over a fresh data directory, on each storage backend."""
    context = await create_app_context(app_config, mail_sender=mail_sender)
    yield context
    context.close()


@pytest_asyncio.fixture
async def reopen(app_config, mail_sender):
    """Factory reloading a new AppContext over the same storage."""
    opened = []

    async def _reopen():
        context = await create_app_context(app_config, mail_sender=mail_sender)
        opened.append(context)
        return context

    yield _reopen
    for context in opened:
        context.close()
