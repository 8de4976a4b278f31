"""Shared helpers for commands: opening the app context and dumping models."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

import typer
from pydantic import BaseModel

from noruno.models.exceptions import NotFoundError
from noruno.services.app_context import AppContext, create_app_context
from noruno.services.config_service import get_config_service
from noruno.utils.logger import set_level

OutputOption = typer.Option("pretty", "--output", "-o", help="Output format (pretty, table, json, yaml, quiet)")


@asynccontextmanager
async def open_app_context() -> AsyncIterator[AppContext]:
    """App context for the configured backend, closed when the command ends."""
    config_service = get_config_service()
    config = config_service.config
    set_level(config.logging.level)
    context = await create_app_context(
        config, storage=config_service.create_storage_strategy()
    )
    try:
        yield context
    finally:
        context.close()


def dump(items: Iterable[BaseModel]) -> list[dict]:
    """JSON-ready dicts for output formatting."""
    return [item.model_dump(mode="json") for item in items]


def require(entity, kind: str, entity_id) -> BaseModel:
    """Return entity, or raise NotFoundError when it is None."""
    if entity is None:
        raise NotFoundError(kind, entity_id)
    return entity
