"""Tests for ConfigService."""

from __future__ import annotations

import json
import stat

import pytest

from noruno.models.config_models import AppConfig, StorageConfig
from noruno.models.exceptions import ConfigurationError
from noruno.models.storage_strategy import JsonStorageStrategy, SqliteStorageStrategy
from noruno.services.app_context import create_app_context
from noruno.services.config_service import (
    ConfigService,
    get_config_service,
    resolve_data_dir,
)


@pytest.fixture
def service() -> ConfigService:
    return ConfigService()


def test_first_load_writes_defaults(service, isolated_dirs):
    config = service.load_config()

    assert config == AppConfig()
    path = isolated_dirs / "config" / "config.json"
    assert path.exists()
    assert stat.S_IMODE(path.stat().st_mode) == 0o600


def test_load_existing_file(service):
    service.config_path.write_text(
        json.dumps({"storage": {"backend": "json"}, "notifications": {"interval_seconds": 5}})
    )

    config = service.load_config()

    assert config.storage.backend == "json"
    assert config.notifications.interval_seconds == 5
    assert config.smtp.host == "smtp.gmail.com"


def test_invalid_file_raises(service):
    service.config_path.write_text(json.dumps({"storage": {"backend": "mongo"}}))

    with pytest.raises(ConfigurationError):
        service.load_config()


def test_data_dir_defaults_to_platform_dir(service, isolated_dirs):
    assert service.data_dir == isolated_dirs / "data"


def test_data_dir_from_config(service, tmp_path):
    service.config_path.write_text(
        json.dumps({"storage": {"data_dir": str(tmp_path / "elsewhere")}})
    )

    assert service.data_dir == tmp_path / "elsewhere"


def test_set_backend_persists(service):
    service.set_backend("json")

    assert ConfigService().config.storage.backend == "json"


def test_set_backend_rejects_unknown(service):
    with pytest.raises(ConfigurationError):
        service.set_backend("mongo")

    assert service.config.storage.backend == "sqlite"


def test_reset(service):
    service.set_backend("json")

    assert service.reset_config() == AppConfig()
    assert ConfigService().config.storage.backend == "sqlite"


def test_storage_strategy_follows_backend(service, isolated_dirs):
    strategy = service.create_storage_strategy()
    assert isinstance(strategy, SqliteStorageStrategy)
    assert strategy.db_path == str(isolated_dirs / "data" / "noruno.db")

    service.set_backend("json")
    strategy = service.create_storage_strategy()
    assert isinstance(strategy, JsonStorageStrategy)
    assert strategy.storage_type == "json"


def test_get_config_service_is_cached():
    assert get_config_service() is get_config_service()


def test_data_dir_defaults_to_platform_dir(service, isolated_dirs):
    assert service.data_dir == isolated_dirs / "data"
    assert resolve_data_dir(AppConfig()) == isolated_dirs / "data"


@pytest.mark.asyncio
async def test_app_context_uses_configured_data_dir(tmp_path):
    config = AppConfig(storage=StorageConfig(backend="json", data_dir=str(tmp_path / "elsewhere")))

    context = await create_app_context(config)
    await context.groups.create_group("Work")
    context.close()

    assert resolve_data_dir(config) == tmp_path / "elsewhere"
    assert (tmp_path / "elsewhere" / "groups.json").exists()
