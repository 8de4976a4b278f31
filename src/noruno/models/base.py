"""Shared helpers for model defaults."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime


def new_id() -> str:
    """Generate a new UUID4 identifier as string."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current timestamp as a timezone-aware UTC datetime."""
    return datetime.now(UTC)
