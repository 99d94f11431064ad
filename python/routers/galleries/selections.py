"""
Galleries Selection Operations

Endpoints:
- POST /{id}/submit   - Submit selections
- POST /{id}/reopen   - Reopen a submitted gallery for editing
- GET /{id}/export    - Download liked filenames (csv or json)
"""

from fastapi import APIRouter, Query
from fastapi.responses import Response

from core.responses import ApiResponse
from core.logging import get_logger
from models.domain.gallery import ExportFormat
from services import exporter

from .helpers import get_gallery_service, gallery_payload

logger = get_logger(__name__)
router = APIRouter()


@router.post("/{gallery_id}/submit")
async def submit_selections(gallery_id: str):
    """Mark selections as submitted (needs at least one liked photo)."""
    manager = await get_gallery_service().open_selection(gallery_id)
    gallery = await manager.submit()
    return ApiResponse.ok(gallery_payload(gallery))


@router.post("/{gallery_id}/reopen")
async def reopen_selections(gallery_id: str):
    """Allow the client to change a submitted selection."""
    manager = await get_gallery_service().open_selection(gallery_id)
    gallery = await manager.reopen_for_editing()
    return ApiResponse.ok(gallery_payload(gallery))


@router.get("/{gallery_id}/export")
async def export_selections(
    gallery_id: str,
    format: ExportFormat = Query(ExportFormat.JSON)
):
    """Download liked filenames as an attachment."""
    manager = await get_gallery_service().open_selection(gallery_id)
    content = manager.export_liked(format)
    filename = exporter.download_filename(format)
    
    logger.info(f"Exported {manager.counts().liked} selections of gallery {gallery_id} as {format.value}")
    return Response(
        content=content,
        media_type=exporter.MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
