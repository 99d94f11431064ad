"""
Source (Google Drive folder) administration service.
"""

from typing import List, Optional

from core.exceptions import InvalidFolderReferenceError, SourceNotFoundError, ValidationError
from core.logging import get_logger
from models.domain.source import Source
from repositories.interfaces import GalleryStore, SourceStore
from services.drive_sync import extract_folder_id
from services.ordering import sort_by_display_order, validate_permutation, move_item, persist_order

logger = get_logger(__name__)


def clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Name is required", field="name")
    return cleaned


def parse_folder_url(folder_url: Optional[str]) -> str:
    folder_id = extract_folder_id(folder_url)
    if folder_id is None:
        raise InvalidFolderReferenceError()
    return folder_id


class SourceService:
    """Register, edit, reorder and delete Drive sources."""

    def __init__(self, sources_repo: SourceStore, galleries_repo: GalleryStore):
        self.sources_repo = sources_repo
        self.galleries_repo = galleries_repo

    async def list_sources(self) -> List[Source]:
        return sort_by_display_order(await self.sources_repo.list_ordered())

    async def get_source(self, source_id: str) -> Source:
        source = await self.sources_repo.get_by_id(source_id)
        if source is None:
            raise SourceNotFoundError(source_id)
        return source

    async def create_source(self, name: str, folder_url: str) -> Source:
        """
        Register a Drive folder.

        Raises:
            ValidationError: empty name
            InvalidFolderReferenceError: no folder ID in the URL
        """
        name = clean_name(name)
        folder_id = parse_folder_url(folder_url)

        existing = await self.sources_repo.list_ordered()
        source = await self.sources_repo.create({
            "name": name,
            "folder_id": folder_id,
            "folder_url": folder_url.strip(),
            "display_order": len(existing),
        })
        logger.info(f"Created source {source.id} '{name}' for folder {folder_id}")
        return source

    async def update_source(
        self,
        source_id: str,
        name: Optional[str] = None,
        folder_url: Optional[str] = None,
    ) -> Source:
        """Rename a source or point it at another folder."""
        await self.get_source(source_id)

        update_data = {}
        if name is not None:
            update_data["name"] = clean_name(name)
        if folder_url is not None:
            update_data["folder_id"] = parse_folder_url(folder_url)
            update_data["folder_url"] = folder_url.strip()

        if not update_data:
            raise ValidationError("No fields to update")

        source = await self.sources_repo.update(source_id, update_data)
        logger.info(f"Updated source {source_id}")
        return source

    async def delete_source(self, source_id: str) -> int:
        """
        Delete a source. Linked galleries are kept and unlinked.

        Returns:
            Number of galleries that were unlinked
        """
        await self.get_source(source_id)

        detached = await self.galleries_repo.detach_source(source_id)
        await self.sources_repo.delete(source_id)
        logger.info(f"Deleted source {source_id} ({detached} galleries unlinked)")

        remaining = sort_by_display_order(await self.sources_repo.list_ordered())
        await persist_order(self.sources_repo, remaining)
        return detached

    async def reorder(self, ids: List[str]) -> List[Source]:
        """Apply a full new order; ids must list every source once."""
        sources = await self.sources_repo.list_ordered()
        validate_permutation([s.id for s in sources], ids)

        by_id = {s.id: s for s in sources}
        ordered = [by_id[i] for i in ids]
        await persist_order(self.sources_repo, ordered)
        return [s.model_copy(update={"display_order": index}) for index, s in enumerate(ordered)]

    async def move(self, source_id: str, to_index: int) -> List[Source]:
        sources = await self.list_sources()
        ids = move_item([s.id for s in sources], source_id, to_index)
        return await self.reorder(ids)
