"""Folder service - memo folder tree.

Deleting a folder clears ``folder_id`` on the memos it held. That operation
locks folders first, then memos.
"""

from __future__ import annotations

from noruno.models import Folder, FolderCreate, FolderUpdate, Memo
from noruno.models.exceptions import InvalidOperationError
from noruno.services.collection import EntityCollection, apply_update
from noruno.utils.logger import get_logger

logger = get_logger(__name__)


class FolderService:
    """Service for folder business logic."""

    def __init__(self, folders: EntityCollection[Folder], memos: EntityCollection[Memo]):
        self.folders = folders
        self.memos = memos

    async def load(self) -> None:
        await self.folders.load()

    async def list_folders(self) -> list[Folder]:
        return await self.folders.list()

    async def get_folder(self, folder_id: str) -> Folder | None:
        return await self.folders.get(folder_id)

    async def create_folder(self, folder_data: FolderCreate) -> list[Folder]:
        return await self.folders.add(Folder(**folder_data.model_dump()))

    async def update_folder(self, folder_id: str, updates: FolderUpdate) -> list[Folder]:
        """Rename or move a folder.

        Raises:
            InvalidOperationError: If the new parent is the folder itself or
                one of its descendants
        """
        async with self.folders.lock:
            folder = self.folders.find(folder_id)
            if folder is None:
                logger.warning("Update ignored: folder %s not found", folder_id)
                return self.folders.snapshot()
            updated = apply_update(folder, updates)
            if self._creates_cycle(folder_id, updated.parent_id):
                raise InvalidOperationError(
                    f"Folder {folder_id} cannot be moved under {updated.parent_id}"
                )
            self.folders.put(updated)
            await self.folders.repository.save(updated)
            logger.debug("Updated folder %s", folder_id)
            return self.folders.snapshot()

    def _creates_cycle(self, folder_id: str, parent_id: str | None) -> bool:
        seen: set[str] = set()
        while parent_id is not None and parent_id not in seen:
            if parent_id == folder_id:
                return True
            seen.add(parent_id)
            parent = self.folders.find(parent_id)
            parent_id = parent.parent_id if parent is not None else None
        return False

    async def delete_folder(self, folder_id: str) -> list[Folder]:
        """Delete a folder and unfile every memo it contained."""
        async with self.folders.lock:
            if self.folders.discard(folder_id):
                await self.folders.repository.delete(folder_id)
            else:
                logger.warning("Delete ignored: folder %s not found", folder_id)

            async with self.memos.lock:
                for memo in self.memos.snapshot():
                    if memo.folder_id == folder_id:
                        memo.folder_id = None
                        self.memos.put(memo)
                        await self.memos.repository.save(memo)
                        logger.debug("Unfiled memo %s", memo.id)

            return self.folders.snapshot()
