"""Memo and folder data models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .base import new_id, utc_now


class Memo(BaseModel):
    """Memo model.

    Attributes:
        id: UUID identifier
        title: Memo title
        content: Memo body
        folder_id: Optional owning folder
        tags: Free-form tags
        created_at: Creation timestamp
        updated_at: Refreshed on every mutation
    """

    id: str = Field(default_factory=new_id)
    title: str
    content: str = ""
    folder_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title, content and tags."""
        needle = query.lower()
        return (
            needle in self.title.lower()
            or needle in self.content.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


class MemoCreate(BaseModel):
    """Model for creating a new memo."""

    title: str
    content: str = ""
    folder_id: str | None = None
    tags: list[str] = Field(default_factory=list)


class MemoUpdate(BaseModel):
    """Model for updating a memo. Unset fields are left untouched."""

    title: str | None = None
    content: str | None = None
    folder_id: str | None = None
    tags: list[str] | None = None


class Folder(BaseModel):
    """Folder grouping memos.

    Attributes:
        id: UUID identifier
        name: Display name
        parent_id: Optional parent folder
    """

    id: str = Field(default_factory=new_id)
    name: str
    parent_id: str | None = None


class FolderCreate(BaseModel):
    """Model for creating a new folder."""

    name: str
    parent_id: str | None = None


class FolderUpdate(BaseModel):
    """Model for updating a folder."""

    name: str | None = None
    parent_id: str | None = None
