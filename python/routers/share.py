"""
Shared Gallery API Router
Anonymous client access by share token: view, like, submit, reopen.
"""

from fastapi import APIRouter, Query

from core.responses import ApiResponse
from core.logging import get_logger
from models.domain.gallery import SelectionFilter
from services.galleries import GalleryService
from routers.galleries.helpers import selection_payload

logger = get_logger(__name__)
router = APIRouter()

gallery_service_instance: GalleryService = None


def set_services(gallery_service: GalleryService):
    global gallery_service_instance
    gallery_service_instance = gallery_service


SHARED_GALLERY_FIELDS = {"id", "title", "selections_submitted"}
SHARED_PHOTO_FIELDS = {"id", "filename", "preview_url", "is_liked"}


def _selection_payload(manager, photos) -> dict:
    return selection_payload(manager, photos, SHARED_GALLERY_FIELDS, SHARED_PHOTO_FIELDS)


@router.get("/{share_token}")
async def get_shared_gallery(
    share_token: str,
    filter: SelectionFilter = Query(SelectionFilter.ALL)
):
    """Open a shared gallery."""
    manager = await gallery_service_instance.open_shared_selection(share_token)
    return ApiResponse.ok(_selection_payload(manager, list(manager.filter(filter))))


@router.post("/{share_token}/photos/{photo_id}/toggle-like")
async def toggle_shared_like(share_token: str, photo_id: str):
    """Toggle a like on a shared gallery photo."""
    manager = await gallery_service_instance.open_shared_selection(share_token)
    result = await manager.toggle_like(photo_id)
    return ApiResponse.ok({
        **result.model_dump(),
        "counts": manager.counts().model_dump(),
    })


@router.post("/{share_token}/submit")
async def submit_shared_selections(share_token: str):
    """Send the client's favorites to the photographer."""
    manager = await gallery_service_instance.open_shared_selection(share_token)
    await manager.submit()
    return ApiResponse.ok(_selection_payload(manager, manager.photos))


@router.post("/{share_token}/reopen")
async def reopen_shared_selections(share_token: str):
    """Let the client revise a submitted selection."""
    manager = await gallery_service_instance.open_shared_selection(share_token)
    await manager.reopen_for_editing()
    return ApiResponse.ok(_selection_payload(manager, manager.photos))
