"""
Google Drive Sync API Router

POST /sync-google-drive  {folderId, galleryId} -> {success, photoCount, message}
Errors are returned as {success: false, error, code} with a non-2xx status.
"""

from fastapi import APIRouter

from core.exceptions import InvalidFolderReferenceError
from core.responses import SyncResponse
from core.logging import get_logger
from models.requests import SyncRequest
from services.drive_sync import DriveSyncReconciler, extract_folder_id
from services.galleries import GalleryService

logger = get_logger(__name__)
router = APIRouter()

reconciler_instance: DriveSyncReconciler = None
gallery_service_instance: GalleryService = None


def set_services(reconciler: DriveSyncReconciler, gallery_service: GalleryService):
    global reconciler_instance, gallery_service_instance
    reconciler_instance = reconciler
    gallery_service_instance = gallery_service


@router.post("/sync-google-drive", response_model=SyncResponse)
async def sync_google_drive(data: SyncRequest):
    """Sync image files of a Drive folder into an existing gallery."""
    folder_id = extract_folder_id(data.folder_id)
    if folder_id is None:
        raise InvalidFolderReferenceError(field="folderId")

    gallery = await gallery_service_instance.get_gallery(data.gallery_id)
    result = await reconciler_instance.sync_to_gallery(folder_id, gallery.id)
    return SyncResponse.create(result.photo_count)
