"""
Gallery administration service.

Creating a gallery is speculative: the row is inserted first, then the
source folder is synced. If the sync fails for any reason the gallery
is deleted again, so no gallery without photos is left behind.
"""

from typing import List, Optional, Tuple

from core.exceptions import (
    GalleryNotFoundError,
    SourceNotFoundError,
    ValidationError,
)
from core.logging import get_logger
from core.tokens import generate_share_token, is_share_token
from models.domain.drive import SyncResult
from models.domain.gallery import Gallery
from repositories.interfaces import GalleryStore, PhotoStore, SourceStore
from services.drive_sync import DriveSyncReconciler
from services.ordering import sort_by_display_order, validate_permutation, move_item, persist_order
from services.selection import GallerySelectionManager

logger = get_logger(__name__)

MIN_TITLE_LENGTH = 2


def clean_title(title: Optional[str]) -> str:
    cleaned = (title or "").strip()
    if len(cleaned) < MIN_TITLE_LENGTH:
        raise ValidationError(
            f"Title must be at least {MIN_TITLE_LENGTH} characters",
            field="title"
        )
    return cleaned


class GalleryService:
    """Create, sync, reorder and delete galleries."""

    def __init__(
        self,
        galleries_repo: GalleryStore,
        photos_repo: PhotoStore,
        sources_repo: SourceStore,
        reconciler: DriveSyncReconciler,
    ):
        self.galleries_repo = galleries_repo
        self.photos_repo = photos_repo
        self.sources_repo = sources_repo
        self.reconciler = reconciler

    # ============================================================
    # Queries
    # ============================================================

    async def list_galleries(self) -> List[Gallery]:
        """All galleries in display order, with photo and liked counts."""
        galleries = sort_by_display_order(await self.galleries_repo.list_ordered())
        result = []
        for gallery in galleries:
            photo_count = await self.photos_repo.count_by_gallery(gallery.id)
            liked_count = await self.photos_repo.count_by_gallery(gallery.id, is_liked=True)
            result.append(gallery.model_copy(update={
                "photo_count": photo_count,
                "liked_count": liked_count,
            }))
        return result

    async def get_gallery(self, gallery_id: str) -> Gallery:
        gallery = await self.galleries_repo.get_by_id(gallery_id)
        if gallery is None:
            raise GalleryNotFoundError(gallery_id)
        return gallery

    async def get_by_share_token(self, share_token: str) -> Gallery:
        """Anonymous lookup by share token."""
        gallery = None
        if is_share_token(share_token):
            gallery = await self.galleries_repo.get_by_share_token(share_token)
        if gallery is None:
            raise GalleryNotFoundError(share_token)
        return gallery

    async def open_selection(self, gallery_id: str) -> GallerySelectionManager:
        return await GallerySelectionManager.load(gallery_id, self.photos_repo, self.galleries_repo)

    async def open_shared_selection(self, share_token: str) -> GallerySelectionManager:
        gallery = await self.get_by_share_token(share_token)
        return await GallerySelectionManager.load(gallery.id, self.photos_repo, self.galleries_repo)

    # ============================================================
    # Create / sync
    # ============================================================

    async def create_gallery(self, title: str, source_id: str) -> Tuple[Gallery, SyncResult]:
        """
        Create a gallery from a source and sync its photos.

        Raises:
            ValidationError: bad title
            SourceNotFoundError: unknown source
            UpstreamError, EmptyResultError, PersistenceError: sync failed
                (the gallery has been deleted again)
        """
        title = clean_title(title)
        if not source_id:
            raise ValidationError("Please select a source", field="source_id")

        source = await self.sources_repo.get_by_id(source_id)
        if source is None:
            raise SourceNotFoundError(source_id)

        existing = await self.galleries_repo.list_ordered()
        gallery = await self.galleries_repo.create({
            "title": title,
            "share_token": generate_share_token(),
            "source_id": source.id,
            "selections_submitted": False,
            "display_order": len(existing),
        })
        logger.info(f"Created gallery {gallery.id} '{title}' from source {source.id}")

        try:
            result = await self.reconciler.sync_to_gallery(source.folder_id, gallery.id)
        except Exception as e:
            logger.warning(f"Sync failed for new gallery {gallery.id}, removing it: {e}")
            await self._discard(gallery.id)
            raise

        return gallery, result

    async def resync_gallery(self, gallery_id: str) -> SyncResult:
        """Pull files added to the source folder since the last sync."""
        gallery = await self.get_gallery(gallery_id)
        if not gallery.source_id:
            raise ValidationError("Gallery is not linked to a source", field="source_id")

        source = await self.sources_repo.get_by_id(gallery.source_id)
        if source is None:
            raise SourceNotFoundError(gallery.source_id)

        return await self.reconciler.sync_to_gallery(source.folder_id, gallery.id)

    async def _discard(self, gallery_id: str) -> None:
        """Remove a speculatively created gallery and anything synced into it."""
        try:
            await self.photos_repo.delete_by_gallery(gallery_id)
            await self.galleries_repo.delete(gallery_id)
        except Exception as e:
            logger.error(f"Could not remove gallery {gallery_id} after failed sync: {e}")

    # ============================================================
    # Update / delete
    # ============================================================

    async def update_gallery(
        self,
        gallery_id: str,
        title: Optional[str] = None,
        source_id: Optional[str] = None,
    ) -> Gallery:
        """Rename a gallery or link it to another source."""
        await self.get_gallery(gallery_id)

        update_data = {}
        if title is not None:
            update_data["title"] = clean_title(title)
        if source_id is not None:
            if await self.sources_repo.get_by_id(source_id) is None:
                raise SourceNotFoundError(source_id)
            update_data["source_id"] = source_id

        if not update_data:
            raise ValidationError("No fields to update")

        gallery = await self.galleries_repo.update(gallery_id, update_data)
        logger.info(f"Updated gallery {gallery_id}")
        return gallery

    async def delete_gallery(self, gallery_id: str) -> int:
        """
        Delete a gallery and its photos.

        Returns:
            Number of deleted photos
        """
        await self.get_gallery(gallery_id)

        deleted_photos = await self.photos_repo.delete_by_gallery(gallery_id)
        await self.galleries_repo.delete(gallery_id)
        logger.info(f"Deleted gallery {gallery_id} with {deleted_photos} photos")

        remaining = sort_by_display_order(await self.galleries_repo.list_ordered())
        await persist_order(self.galleries_repo, remaining)
        return deleted_photos

    # ============================================================
    # Ordering
    # ============================================================

    async def reorder(self, ids: List[str]) -> List[Gallery]:
        """Apply a full new order; ids must list every gallery once."""
        galleries = await self.galleries_repo.list_ordered()
        validate_permutation([g.id for g in galleries], ids)

        by_id = {g.id: g for g in galleries}
        ordered = [by_id[i] for i in ids]
        await persist_order(self.galleries_repo, ordered)
        return [g.model_copy(update={"display_order": index}) for index, g in enumerate(ordered)]

    async def move(self, gallery_id: str, to_index: int) -> List[Gallery]:
        galleries = sort_by_display_order(await self.galleries_repo.list_ordered())
        ids = move_item([g.id for g in galleries], gallery_id, to_index)
        return await self.reorder(ids)
