"""
Gallery selection manager.

Tracks liked state and submission for one gallery session:
- toggle_like with optimistic update and rollback on write failure
- filtered, restartable photo views and per-filter counts
- submit / reopen state machine (Editable <-> Submitted)
- export of liked filenames as CSV or JSON
"""

import asyncio
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Union

from core.exceptions import (
    AppException,
    PersistenceError,
    PhotoNotFoundError,
    ValidationError,
    SelectionsSubmittedError,
    NoSelectionsError,
)
from core.logging import get_logger
from models.domain.gallery import (
    Gallery,
    Photo,
    SelectionState,
    SelectionFilter,
    SelectionCounts,
    ExportFormat,
    ToggleResult,
)
from repositories.interfaces import PhotoStore, GalleryStore
from services import exporter

logger = get_logger(__name__)


def parse_filter(value: Union[str, SelectionFilter]) -> SelectionFilter:
    try:
        return SelectionFilter(value)
    except ValueError:
        raise ValidationError(f"Unknown filter '{value}'", field="filter")


def parse_export_format(value: Union[str, ExportFormat]) -> ExportFormat:
    try:
        return ExportFormat(value)
    except ValueError:
        raise ValidationError(f"Unknown export format '{value}'", field="format")


class PhotoView:
    """
    Lazy view of a gallery's photos matching one filter.

    Iterating again starts over and reflects the current liked state.
    """

    def __init__(self, photos: List[Photo], selection_filter: SelectionFilter):
        self._photos = photos
        self.filter = selection_filter

    def __iter__(self) -> Iterator[Photo]:
        return (photo for photo in self._photos if self.filter.matches(photo))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def filenames(self) -> List[str]:
        return [photo.filename for photo in self]


class GallerySelectionManager:
    """
    Selection state of one gallery, backed by injected stores.

    Photos keep the order they were loaded in (gallery photo order).
    """

    def __init__(
        self,
        gallery: Gallery,
        photos: List[Photo],
        photos_repo: PhotoStore,
        galleries_repo: GalleryStore,
    ):
        self.gallery = gallery
        self.photos_repo = photos_repo
        self.galleries_repo = galleries_repo
        self._photos: List[Photo] = list(photos)
        self._by_id: Dict[str, Photo] = {photo.id: photo for photo in self._photos}
        self._lock = asyncio.Lock()

    @classmethod
    async def load(
        cls,
        gallery_id: str,
        photos_repo: PhotoStore,
        galleries_repo: GalleryStore,
    ) -> "GallerySelectionManager":
        """Load a gallery and its photos from the stores."""
        gallery = await galleries_repo.get_by_id_or_raise(gallery_id)
        photos = await photos_repo.list_by_gallery(gallery_id)
        return cls(gallery, photos, photos_repo, galleries_repo)

    # ============================================================
    # Read views
    # ============================================================

    @property
    def state(self) -> SelectionState:
        return self.gallery.state

    @property
    def photos(self) -> List[Photo]:
        return list(self._photos)

    def get_photo(self, photo_id: str) -> Photo:
        photo = self._by_id.get(photo_id)
        if photo is None:
            raise PhotoNotFoundError(photo_id)
        return photo

    def filter(self, selection_filter: Union[str, SelectionFilter] = SelectionFilter.ALL) -> PhotoView:
        return PhotoView(self._photos, parse_filter(selection_filter))

    def counts(self) -> SelectionCounts:
        liked = 0
        for photo in self._photos:
            if photo.is_liked:
                liked += 1
        total = len(self._photos)
        return SelectionCounts(all=total, liked=liked, unliked=total - liked)

    # ============================================================
    # Mutations
    # ============================================================

    async def toggle_like(self, photo_id: str) -> ToggleResult:
        """
        Flip the liked flag of a photo.

        The in-memory value changes first; if the write fails it is put
        back and PersistenceError is raised with the prior value in its
        details. Calls are applied in the order they were issued.

        Raises:
            SelectionsSubmittedError: gallery is submitted
            PhotoNotFoundError: photo is not in this gallery
            PersistenceError: the store rejected the write
        """
        async with self._lock:
            if self.state is SelectionState.SUBMITTED:
                raise SelectionsSubmittedError()

            photo = self.get_photo(photo_id)
            prior_value = photo.is_liked
            photo.is_liked = not prior_value

            try:
                await self.photos_repo.set_liked(photo_id, photo.is_liked)
            except Exception as e:
                photo.is_liked = prior_value
                logger.warning(f"Like toggle for photo {photo_id} rolled back: {e}")
                if isinstance(e, PersistenceError):
                    e.details.setdefault("photo_id", photo_id)
                    e.details.setdefault("prior_value", prior_value)
                    raise
                if isinstance(e, AppException):
                    raise
                raise PersistenceError(
                    str(e),
                    operation="photos.set_liked",
                    details={"photo_id": photo_id, "prior_value": prior_value}
                ) from e

            return ToggleResult(
                photo_id=photo_id,
                committed=True,
                prior_value=prior_value,
                is_liked=photo.is_liked,
            )

    async def submit(self) -> Gallery:
        """
        Editable -> Submitted. Requires at least one liked photo.

        Raises:
            SelectionsSubmittedError: already submitted
            NoSelectionsError: nothing is liked
        """
        async with self._lock:
            if self.state is SelectionState.SUBMITTED:
                raise SelectionsSubmittedError()
            if self.counts().liked == 0:
                raise NoSelectionsError()

            self.gallery = await self.galleries_repo.update(
                self.gallery.id, {"selections_submitted": True}
            )
            logger.info(f"Gallery {self.gallery.id} submitted with {self.counts().liked} selections")
            return self.gallery

    async def reopen_for_editing(self) -> Gallery:
        """Submitted -> Editable. Always permitted."""
        async with self._lock:
            if self.state is SelectionState.EDITABLE:
                return self.gallery

            self.gallery = await self.galleries_repo.update(
                self.gallery.id, {"selections_submitted": False}
            )
            logger.info(f"Gallery {self.gallery.id} reopened for editing")
            return self.gallery

    # ============================================================
    # Export
    # ============================================================

    def liked_filenames(self) -> List[str]:
        return self.filter(SelectionFilter.LIKED).filenames()

    def export_liked(
        self,
        export_format: Union[str, ExportFormat] = ExportFormat.JSON,
        exported_at: Optional[datetime] = None,
    ) -> str:
        """Text payload of liked filenames in gallery order."""
        return exporter.render(
            parse_export_format(export_format),
            self.liked_filenames(),
            exported_at=exported_at,
            gallery_title=self.gallery.title,
        )
