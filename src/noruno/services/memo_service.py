"""Memo service - Business logic for memos, search and tags."""

from __future__ import annotations

from noruno.models import Memo, MemoCreate, MemoUpdate
from noruno.models.base import utc_now
from noruno.services.collection import EntityCollection, apply_update


class MemoService:
    """Service for memo business logic."""

    def __init__(self, memos: EntityCollection[Memo]):
        self.memos = memos

    async def load(self) -> None:
        await self.memos.load()

    async def list_memos(self) -> list[Memo]:
        return await self.memos.list()

    async def get_memo(self, memo_id: str) -> Memo | None:
        return await self.memos.get(memo_id)

    async def create_memo(self, memo_data: MemoCreate) -> list[Memo]:
        return await self.memos.add(Memo(**memo_data.model_dump()))

    async def update_memo(self, memo_id: str, updates: MemoUpdate) -> list[Memo]:
        """Apply the set fields of updates and refresh updated_at."""

        def mutate(memo: Memo) -> Memo:
            updated = apply_update(memo, updates)
            updated.updated_at = utc_now()
            return updated

        return await self.memos.modify(memo_id, mutate)

    async def delete_memo(self, memo_id: str) -> list[Memo]:
        return await self.memos.remove(memo_id)

    async def search_memos(self, query: str) -> list[Memo]:
        """Case-insensitive substring search over title, content and tags.

        An empty query matches every memo.
        """
        return [memo for memo in await self.memos.list() if memo.matches(query)]

    async def get_all_tags(self) -> list[str]:
        """Sorted, de-duplicated union of all memo tags."""
        memos = await self.memos.list()
        return sorted({tag for memo in memos for tag in memo.tags})

    async def list_memos_in_folder(self, folder_id: str | None) -> list[Memo]:
        """Memos directly in folder_id (None lists unfiled memos)."""
        return [m for m in await self.memos.list() if m.folder_id == folder_id]
