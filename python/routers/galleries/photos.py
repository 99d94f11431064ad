"""
Galleries Photo Operations

Endpoints:
- GET /{id}/photos                            - Photos with counts, filtered
- POST /{id}/photos/{photo_id}/toggle-like    - Toggle a like
"""

from fastapi import APIRouter, Query

from core.responses import ApiResponse
from core.logging import get_logger
from models.domain.gallery import SelectionFilter

from .helpers import get_gallery_service, selection_payload

logger = get_logger(__name__)
router = APIRouter()


@router.get("/{gallery_id}/photos")
async def get_gallery_photos(
    gallery_id: str,
    filter: SelectionFilter = Query(SelectionFilter.ALL)
):
    """Get photos of a gallery in gallery order.
    
    Counts always cover the whole gallery, not only the filtered photos.
    """
    manager = await get_gallery_service().open_selection(gallery_id)
    return ApiResponse.ok(selection_payload(manager, list(manager.filter(filter))))


@router.post("/{gallery_id}/photos/{photo_id}/toggle-like")
async def toggle_photo_like(gallery_id: str, photo_id: str):
    """Toggle the liked flag of a photo (rejected once submitted)."""
    manager = await get_gallery_service().open_selection(gallery_id)
    result = await manager.toggle_like(photo_id)
    return ApiResponse.ok({
        **result.model_dump(),
        "counts": manager.counts().model_dump(),
    })
