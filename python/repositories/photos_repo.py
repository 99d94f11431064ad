"""
Photos repository - handles the photos table.
"""

from typing import Optional, List, Dict, Any, Set

from repositories.base import BaseRepository
from models.domain.gallery import Photo, PhotoMetadata
from core.exceptions import PersistenceError, PhotoNotFoundError
from core.logging import get_logger

logger = get_logger(__name__)


class PhotosRepository(BaseRepository):
    """
    Repository for photos table.
    """

    table_name = "photos"
    entity_name = "Photo"

    # ============================================================
    # Query Methods
    # ============================================================

    async def list_by_gallery(self, gallery_id: str) -> List[Photo]:
        """
        Get all photos of a gallery in gallery order (created_at, id).
        """
        rows = await self.client.paginated_query(
            self.table_name,
            filters={"gallery_id": gallery_id},
            order_by=["created_at", "id"],
        )
        return [self._to_model(row) for row in rows]

    async def get_remote_file_ids(self, gallery_id: str) -> Set[str]:
        """
        Get Drive file IDs already present in a gallery.
        """
        rows = await self.client.paginated_query(
            self.table_name,
            columns="id, google_file_id",
            filters={"gallery_id": gallery_id},
            order_by=["id"],
        )
        return {row["google_file_id"] for row in rows if row.get("google_file_id")}

    async def count_by_gallery(self, gallery_id: str, is_liked: Optional[bool] = None) -> int:
        """
        Count photos in a gallery, optionally only liked or unliked ones.
        """
        filters = {"gallery_id": gallery_id}
        if is_liked is not None:
            filters["is_liked"] = is_liked
        return await self.count(filters)

    # ============================================================
    # Mutations
    # ============================================================

    async def insert_many(self, rows: List[Dict[str, Any]]) -> List[Photo]:
        """
        Insert photos in a single statement.

        Either every row is stored or none is.
        """
        if not rows:
            return []

        try:
            payload = [self.client.clean_for_json(self._to_row(row)) for row in rows]
            response = self._timed("insert", lambda: self.table.insert(payload).execute())
        except Exception as e:
            self._handle_error("insert_many", e)

        inserted = response.data or []
        if len(inserted) != len(rows):
            raise PersistenceError(
                f"Inserted {len(inserted)} of {len(rows)} photos",
                operation="photos.insert_many"
            )

        logger.info(f"Inserted {len(inserted)} photos")
        return [self._to_model(row) for row in inserted]

    async def set_liked(self, photo_id: str, is_liked: bool) -> Photo:
        """
        Persist the liked flag of one photo.
        """
        try:
            response = self._timed("update", lambda: (
                self.table
                .update({"is_liked": is_liked})
                .eq("id", photo_id)
                .execute()
            ))
        except Exception as e:
            self._handle_error("set_liked", e)

        if not response.data:
            raise PhotoNotFoundError(photo_id)

        return self._to_model(response.data[0])

    async def delete_by_gallery(self, gallery_id: str) -> int:
        """
        Delete all photos of a gallery.

        Returns:
            Number of deleted photos
        """
        try:
            response = self._timed("delete", lambda: (
                self.table
                .delete()
                .eq("gallery_id", gallery_id)
                .execute()
            ))
        except Exception as e:
            self._handle_error("delete_by_gallery", e)

        return len(response.data or [])

    # ============================================================
    # Model Conversion
    # ============================================================

    @staticmethod
    def _to_row(data: Dict[str, Any]) -> Dict[str, Any]:
        """Convert domain field names to column names."""
        row = dict(data)
        if "remote_file_id" in row:
            row["google_file_id"] = row.pop("remote_file_id")
        if "preview_url" in row:
            row["thumbnail_url"] = row.pop("preview_url")
        return row

    def _to_model(self, data: Dict) -> Photo:
        """Convert database row to Photo model."""
        metadata = data.get("metadata")
        return Photo(
            id=data["id"],
            gallery_id=data["gallery_id"],
            filename=data["filename"],
            remote_file_id=data.get("google_file_id"),
            preview_url=data.get("thumbnail_url") or "",
            is_liked=data.get("is_liked") or False,
            metadata=PhotoMetadata(**metadata) if metadata else None,
            created_at=data.get("created_at"),
        )
