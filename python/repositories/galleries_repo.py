"""
Galleries repository - handles the galleries table.
"""

from typing import Optional, Dict, Any

from repositories.base import BaseRepository
from models.domain.gallery import Gallery
from core.logging import get_logger

logger = get_logger(__name__)

# Domain field -> column name
_COLUMNS = {
    "source_id": "admin_profile_id",
}


class GalleriesRepository(BaseRepository):
    """
    Repository for galleries table.
    """
    
    table_name = "galleries"
    entity_name = "Gallery"
    
    # ============================================================
    # Query Methods
    # ============================================================
    
    async def get_by_share_token(self, share_token: str) -> Optional[Gallery]:
        """
        Get gallery by its anonymous share token.
        """
        try:
            response = self._timed("select", lambda: (
                self.table
                .select("*")
                .eq("share_token", share_token)
                .limit(1)
                .execute()
            ))
        except Exception as e:
            self._handle_error("get_by_share_token", e)
        
        if not response.data:
            return None
        
        return self._to_model(response.data[0])
    
    # ============================================================
    # Mutations
    # ============================================================
    
    async def create(self, data: Dict[str, Any]) -> Gallery:
        return await super().create(self._to_row(data))
    
    async def update(self, id: str, data: Dict[str, Any]) -> Gallery:
        return await super().update(id, self._to_row(data))
    
    async def detach_source(self, source_id: str) -> int:
        """
        Unlink all galleries from a source without deleting them.
        
        Returns:
            Number of galleries detached
        """
        try:
            response = self._timed("update", lambda: (
                self.table
                .update({"admin_profile_id": None})
                .eq("admin_profile_id", source_id)
                .execute()
            ))
        except Exception as e:
            self._handle_error("detach_source", e)
        
        detached = len(response.data or [])
        if detached:
            logger.info(f"Detached {detached} galleries from source {source_id}")
        return detached
    
    # ============================================================
    # Model Conversion
    # ============================================================
    
    @staticmethod
    def _to_row(data: Dict[str, Any]) -> Dict[str, Any]:
        return {_COLUMNS.get(key, key): value for key, value in data.items()}
    
    def _to_model(self, data: Dict) -> Gallery:
        """Convert database row to Gallery model."""
        return Gallery(
            id=data["id"],
            title=data.get("title", ""),
            share_token=data["share_token"],
            source_id=data.get("admin_profile_id"),
            selections_submitted=data.get("selections_submitted") or False,
            display_order=data.get("display_order") or 0,
            created_at=data.get("created_at"),
        )
