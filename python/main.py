"""
Photo Culling API - Main Entry Point

This is the FastAPI application entry point.
Uses core/ for configuration, exceptions, and logging.
"""

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

# Core imports
from core.config import settings
from core.handlers import install_exception_handlers
from core.responses import ApiResponse
from core.logging import setup_logging, get_logger

# Setup logging first
setup_logging(level="INFO" if not settings.debug else "DEBUG")
logger = get_logger(__name__)

# Infrastructure, repositories and services
from infrastructure import GoogleDriveClient, get_supabase_client
from repositories import GalleriesRepository, PhotosRepository, SourcesRepository
from services import DriveSyncReconciler, GalleryService, SourceService

# Router imports
from routers import galleries, sources, share, sync

VERSION = "1.0.0"

# ============================================================
# Application Setup
# ============================================================

app = FastAPI(
    title="Photo Culling API",
    description="Galleries synced from Google Drive, client favorites and export",
    version=VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    redirect_slashes=False,
)

# ============================================================
# CORS Configuration
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    expose_headers=["content-disposition"],
    max_age=3600,
)

logger.info("CORS middleware configured")

# ============================================================
# Global Exception Handlers
# ============================================================

install_exception_handlers(app)

# ============================================================
# Service Initialization (Dependency Injection)
# ============================================================

logger.info(f"Starting Photo Culling API v{VERSION}")

# 1. Clients
supabase_client = get_supabase_client()
drive_client = GoogleDriveClient()
if not settings.google_api_key:
    logger.warning("GOOGLE_API_KEY not set - Drive sync requests will fail")

# 2. Repositories
galleries_repo = GalleriesRepository(supabase_client)
photos_repo = PhotosRepository(supabase_client)
sources_repo = SourcesRepository(supabase_client)
logger.info("✓ Created repositories")

# 3. Services
reconciler = DriveSyncReconciler(drive_client, photos_repo)
gallery_service = GalleryService(galleries_repo, photos_repo, sources_repo, reconciler)
source_service = SourceService(sources_repo, galleries_repo)
logger.info("✓ Created services")

# 4. Inject services into routers
galleries.set_services(gallery_service, source_service)
sources.set_services(source_service)
share.set_services(gallery_service)
sync.set_services(reconciler, gallery_service)
logger.info("✓ Service instances injected into all routers")

# ============================================================
# Root Endpoints
# ============================================================

@app.get("/api/health")
async def health_check():
    """
    Health check endpoint.
    """
    return ApiResponse.ok({
        "status": "healthy",
        "service": "photo-culling",
        "version": VERSION,
        "drive_configured": bool(settings.google_api_key)
    }).model_dump()

# ============================================================
# Router Registration
# ============================================================

app.include_router(sync.router, prefix="/api", tags=["sync"])
app.include_router(sources.router, prefix="/api/sources", tags=["sources"])
app.include_router(galleries.router, prefix="/api/galleries", tags=["galleries"])
app.include_router(share.router, prefix="/api/share", tags=["share"])

logger.info(f"Application startup complete. Running on {settings.server_host}:{settings.server_port}")

# ============================================================
# Entry Point
# ============================================================

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug
    )
