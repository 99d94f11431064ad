"""
Sources API Router
CRUD and ordering for Google Drive folder sources.
"""

from fastapi import APIRouter

from core.responses import ApiResponse
from core.logging import get_logger
from models.requests import SourceCreate, SourceUpdate, ReorderRequest, MoveRequest
from services.sources import SourceService

logger = get_logger(__name__)
router = APIRouter()

source_service_instance: SourceService = None


def set_services(source_service: SourceService):
    global source_service_instance
    source_service_instance = source_service


def _payload(source) -> dict:
    return source.model_dump(mode="json", exclude_none=True)


@router.get("")
async def get_sources():
    """Get all sources in display order."""
    sources = await source_service_instance.list_sources()
    return ApiResponse.ok([_payload(s) for s in sources])


@router.post("")
async def create_source(data: SourceCreate):
    """Register a Google Drive folder by URL or ID."""
    source = await source_service_instance.create_source(data.name, data.folder_url)
    return ApiResponse.ok(_payload(source))


@router.put("/order")
async def reorder_sources(data: ReorderRequest):
    """Persist a new manual order."""
    sources = await source_service_instance.reorder(data.ids)
    return ApiResponse.ok([_payload(s) for s in sources])


@router.post("/move")
async def move_source(data: MoveRequest):
    """Move one source to a new position."""
    sources = await source_service_instance.move(data.id, data.to_index)
    return ApiResponse.ok([_payload(s) for s in sources])


@router.get("/{source_id}")
async def get_source(source_id: str):
    """Get a source by ID."""
    source = await source_service_instance.get_source(source_id)
    return ApiResponse.ok(_payload(source))


@router.put("/{source_id}")
async def update_source(source_id: str, data: SourceUpdate):
    """Rename a source or change its folder."""
    source = await source_service_instance.update_source(
        source_id,
        name=data.name,
        folder_url=data.folder_url
    )
    return ApiResponse.ok(_payload(source))


@router.delete("/{source_id}")
async def delete_source(source_id: str):
    """Delete a source. Galleries synced from it are kept."""
    detached = await source_service_instance.delete_source(source_id)
    return ApiResponse.ok({"deleted": True, "galleries_detached": detached})
