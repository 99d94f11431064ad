"""
Sources repository - handles the admin_profiles table.
"""

from typing import Dict, Any

from repositories.base import BaseRepository
from models.domain.source import Source

# Domain field -> column name
_COLUMNS = {
    "folder_id": "google_folder_id",
    "folder_url": "google_folder_url",
}


class SourcesRepository(BaseRepository):
    """
    Repository for admin_profiles table (Google Drive sources).
    """
    
    table_name = "admin_profiles"
    entity_name = "Source"
    
    async def create(self, data: Dict[str, Any]) -> Source:
        return await super().create(self._to_row(data))
    
    async def update(self, id: str, data: Dict[str, Any]) -> Source:
        return await super().update(id, self._to_row(data))
    
    @staticmethod
    def _to_row(data: Dict[str, Any]) -> Dict[str, Any]:
        return {_COLUMNS.get(key, key): value for key, value in data.items()}
    
    def _to_model(self, data: Dict) -> Source:
        """Convert database row to Source model."""
        return Source(
            id=data["id"],
            name=data.get("name", ""),
            folder_id=data.get("google_folder_id", ""),
            folder_url=data.get("google_folder_url", ""),
            display_order=data.get("display_order") or 0,
            created_at=data.get("created_at"),
        )
