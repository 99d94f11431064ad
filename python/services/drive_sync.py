"""
Google Drive sync reconciler.

Lists every image file in a Drive folder and materializes the ones a
gallery does not have yet as photo rows. The listing is resolved in
full before anything is written, and the insert is a single statement.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Protocol

from core.config import settings
from core.exceptions import AppException, EmptyResultError, UpstreamError
from core.logging import get_logger
from models.domain.drive import RemoteFile, RemotePage, SyncResult
from repositories.interfaces import PhotoStore

logger = get_logger(__name__)

IMAGE_EXTENSIONS = (".arw", ".jpg", ".jpeg", ".png", ".cr2", ".nef", ".raf", ".dng")

PREVIEW_URL_TEMPLATE = "https://drive.google.com/thumbnail?id={file_id}&sz=w{width}"

# Tried in order; the first match wins
_FOLDER_ID_PATTERNS = [
    re.compile(r"/folders/([A-Za-z0-9_-]+)"),
    re.compile(r"id=([A-Za-z0-9_-]+)"),
    re.compile(r"^([A-Za-z0-9_-]+)$"),
]


def extract_folder_id(value: Optional[str]) -> Optional[str]:
    """
    Extract a Drive folder ID from a URL or a bare ID.

    Accepts `.../drive/folders/<id>`, any URL with `id=<id>`, or the ID
    itself. Returns None when nothing matches.
    """
    if not value:
        return None

    candidate = value.strip()
    for pattern in _FOLDER_ID_PATTERNS:
        match = pattern.search(candidate)
        if match:
            return match.group(1)
    return None


def is_eligible(filename: str) -> bool:
    return filename.lower().endswith(IMAGE_EXTENSIONS)


def filter_eligible(files: Iterable[RemoteFile]) -> List[RemoteFile]:
    """Keep image files (by extension, case-insensitive), preserving order."""
    return [remote for remote in files if is_eligible(remote.name)]


def preview_url(file_id: str, width: Optional[int] = None) -> str:
    return PREVIEW_URL_TEMPLATE.format(file_id=file_id, width=width or settings.preview_width)


class DrivePageSource(Protocol):
    async def fetch_page(self, folder_id: str, page_token: Optional[str] = None) -> RemotePage: ...


class DriveSyncReconciler:
    """
    Syncs a Drive folder into a gallery.

    Args:
        drive_client: anything with `fetch_page(folder_id, page_token)`
        photos_repo: photo store used for the idempotence check and insert
        preview_width: pixel width requested in preview URLs
    """

    def __init__(
        self,
        drive_client: DrivePageSource,
        photos_repo: PhotoStore,
        preview_width: Optional[int] = None,
    ):
        self.drive_client = drive_client
        self.photos_repo = photos_repo
        self.preview_width = preview_width or settings.preview_width

    async def list_folder_files(self, folder_id: str) -> List[RemoteFile]:
        """
        List every file in a folder, following continuation tokens.

        All pages are collected before returning. A failure on any page
        discards what was fetched and raises UpstreamError.
        """
        files: List[RemoteFile] = []
        page_token: Optional[str] = None
        pages = 0

        logger.info(f"Fetching files from folder: {folder_id}")

        while True:
            try:
                page = await self.drive_client.fetch_page(folder_id, page_token)
            except AppException:
                raise
            except Exception as e:
                logger.error(f"Listing folder {folder_id} failed on page {pages + 1}: {e}")
                raise UpstreamError(folder_id=folder_id) from e

            pages += 1
            files.extend(page.files)
            page_token = page.next_page_token
            if not page_token:
                break

        logger.info(f"Found {len(files)} files in folder ({pages} pages)")
        return files

    def build_photo_rows(
        self,
        gallery_id: str,
        files: Iterable[RemoteFile],
        ingested_at: Optional[datetime] = None,
    ) -> List[dict]:
        """
        Photo rows in listing order.

        Rows of one insert would share a server default created_at, so each
        row gets its own timestamp one millisecond after the previous one.
        """
        ingested_at = ingested_at or datetime.now(timezone.utc)
        return [
            {
                "gallery_id": gallery_id,
                "filename": remote.name,
                "remote_file_id": remote.id,
                "preview_url": preview_url(remote.id, self.preview_width),
                "is_liked": False,
                "created_at": ingested_at + timedelta(milliseconds=position),
            }
            for position, remote in enumerate(files)
        ]

    async def sync_to_gallery(self, folder_id: str, gallery_id: str) -> SyncResult:
        """
        Insert photos for eligible folder files the gallery does not have yet.

        Re-running with an unchanged folder inserts nothing.

        Raises:
            UpstreamError: folder listing failed or is not accessible
            EmptyResultError: no image files in the folder
            PersistenceError: photo insert failed
        """
        files = await self.list_folder_files(folder_id)

        eligible = filter_eligible(files)
        logger.info(f"Found {len(eligible)} image files")

        if not eligible:
            raise EmptyResultError(folder_id=folder_id, total_files=len(files))

        known = set(await self.photos_repo.get_remote_file_ids(gallery_id))
        fresh: List[RemoteFile] = []
        for remote in eligible:
            if remote.id in known:
                continue
            known.add(remote.id)
            fresh.append(remote)

        inserted = await self.photos_repo.insert_many(self.build_photo_rows(gallery_id, fresh))

        result = SyncResult(
            gallery_id=gallery_id,
            folder_id=folder_id,
            photo_count=len(inserted),
            eligible_count=len(eligible),
            skipped_count=len(eligible) - len(fresh),
        )
        logger.info(
            f"Successfully synced {result.photo_count} photos into gallery {gallery_id} "
            f"({result.skipped_count} already present)"
        )
        return result
