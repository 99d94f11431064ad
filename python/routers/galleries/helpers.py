"""
Galleries Helper Functions
"""

from typing import Dict, List, Optional, Set

from models.domain.gallery import Gallery
from services.galleries import GalleryService
from services.selection import GallerySelectionManager


def get_gallery_service() -> GalleryService:
    """Get gallery service instance from package globals."""
    from . import gallery_service_instance
    return gallery_service_instance


def gallery_payload(gallery: Gallery) -> Dict:
    return gallery.model_dump(mode="json", exclude_none=True)


def selection_payload(
    manager: GallerySelectionManager,
    photos: List,
    gallery_fields: Optional[Set[str]] = None,
    photo_fields: Optional[Set[str]] = None,
) -> Dict:
    """Gallery, selection state, counts and the given photos.

    `gallery_fields` and `photo_fields` narrow what is exposed; the
    share routes only show clients what they need.
    """
    return {
        "gallery": manager.gallery.model_dump(mode="json", exclude_none=True, include=gallery_fields),
        "state": manager.state.value,
        "counts": manager.counts().model_dump(),
        "photos": [
            photo.model_dump(mode="json", exclude_none=True, include=photo_fields)
            for photo in photos
        ],
    }


def get_source_service():
    """Get source service instance from package globals."""
    from . import source_service_instance
    return source_service_instance
