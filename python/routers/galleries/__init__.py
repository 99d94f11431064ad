"""
Galleries API Router Package
Admin operations on galleries: CRUD, ordering, sync, selections, export.
"""

from fastapi import APIRouter

from services.galleries import GalleryService
from services.sources import SourceService

# Global service instances (set via set_services)
gallery_service_instance: GalleryService = None
source_service_instance: SourceService = None


def set_services(gallery_service: GalleryService, source_service: SourceService = None):
    """Set service instances for dependency injection."""
    global gallery_service_instance, source_service_instance
    gallery_service_instance = gallery_service
    source_service_instance = source_service


# Create main router
router = APIRouter()

# Import sub-routers AFTER globals are defined (they reference them)
from .crud import router as crud_router
from .photos import router as photos_router
from .selections import router as selections_router

# Include all sub-routers
router.include_router(crud_router)
router.include_router(photos_router)
router.include_router(selections_router)

# Export for main.py
__all__ = ["router", "set_services"]
