"""
Galleries CRUD Operations

Endpoints:
- GET /               - List galleries (display order, with counts)
- POST /              - Create gallery and sync its photos
- PUT /order          - Reorder all galleries
- POST /move          - Move one gallery to a new position
- POST /bulk-delete   - Delete selected sources and galleries
- GET /{id}           - Get gallery
- PUT /{id}           - Rename / relink gallery
- DELETE /{id}        - Delete gallery and its photos
- POST /{id}/sync     - Pull new files from the linked source
"""

from fastapi import APIRouter

from core.responses import ApiResponse
from core.exceptions import AppException, PersistenceError, ValidationError
from core.logging import get_logger
from models.requests import GalleryCreate, GalleryUpdate, BulkDeleteRequest, ReorderRequest, MoveRequest

from .helpers import get_gallery_service, get_source_service, gallery_payload

logger = get_logger(__name__)
router = APIRouter()


@router.get("/")
async def get_galleries():
    """Get all galleries for the dashboard.
    
    Returns galleries with photo_count and liked_count fields.
    """
    galleries = await get_gallery_service().list_galleries()
    return ApiResponse.ok([gallery_payload(g) for g in galleries])


@router.post("/")
async def create_gallery(data: GalleryCreate):
    """Create a gallery from a source; removed again if the sync fails."""
    gallery, result = await get_gallery_service().create_gallery(data.title, data.source_id)
    logger.info(f"Created gallery: {gallery.title} with {result.photo_count} photos")
    return ApiResponse.ok({
        "gallery": gallery_payload(gallery),
        "sync": result.model_dump(),
    })


@router.put("/order")
async def reorder_galleries(data: ReorderRequest):
    """Persist a new manual order."""
    galleries = await get_gallery_service().reorder(data.ids)
    return ApiResponse.ok([gallery_payload(g) for g in galleries])


@router.post("/move")
async def move_gallery(data: MoveRequest):
    """Move one gallery to a new position."""
    galleries = await get_gallery_service().move(data.id, data.to_index)
    return ApiResponse.ok([gallery_payload(g) for g in galleries])


@router.post("/bulk-delete")
async def bulk_delete(data: BulkDeleteRequest):
    """Delete selected sources (galleries are kept) and selected galleries."""
    if not data.source_ids and not data.gallery_ids:
        raise ValidationError("Nothing selected")
    
    source_service = get_source_service()
    gallery_service = get_gallery_service()
    
    try:
        for source_id in data.source_ids:
            await source_service.delete_source(source_id)
        
        deleted_photos = 0
        for gallery_id in data.gallery_ids:
            deleted_photos += await gallery_service.delete_gallery(gallery_id)
    except AppException:
        raise
    except Exception as e:
        logger.error(f"Error in bulk delete: {e}")
        raise PersistenceError(str(e), operation="bulk_delete")
    
    deleted_count = len(data.source_ids) + len(data.gallery_ids)
    logger.info(f"Bulk deleted {deleted_count} items")
    return ApiResponse.ok({
        "deleted_count": deleted_count,
        "deleted_photos": deleted_photos,
    })


@router.get("/{gallery_id}")
async def get_gallery(gallery_id: str):
    """Get a gallery by ID."""
    gallery = await get_gallery_service().get_gallery(gallery_id)
    return ApiResponse.ok(gallery_payload(gallery))


@router.put("/{gallery_id}")
async def update_gallery(gallery_id: str, data: GalleryUpdate):
    """Rename a gallery or link it to another source."""
    gallery = await get_gallery_service().update_gallery(
        gallery_id,
        title=data.title,
        source_id=data.source_id
    )
    return ApiResponse.ok(gallery_payload(gallery))


@router.delete("/{gallery_id}")
async def delete_gallery(gallery_id: str):
    """Delete a gallery and all its photos."""
    deleted_photos = await get_gallery_service().delete_gallery(gallery_id)
    return ApiResponse.ok({"deleted": True, "deleted_photos": deleted_photos})


@router.post("/{gallery_id}/sync")
async def sync_gallery(gallery_id: str):
    """Pull files added to the source folder since the last sync."""
    result = await get_gallery_service().resync_gallery(gallery_id)
    return ApiResponse.ok(result.model_dump())
