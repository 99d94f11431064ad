"""
Unified Supabase client.
Owns the connection and the query helpers shared by repositories.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Dict, Optional, Any
from pydantic import BaseModel
from supabase import create_client, Client

from core.config import settings
from core.exceptions import PersistenceError
from core.logging import get_logger

logger = get_logger(__name__)


class SupabaseClient:
    """
    Unified Supabase client for all database operations.

    Provides:
    - Connection management
    - Pagination support
    - Type conversion utilities
    """

    def __init__(self, url: Optional[str] = None, key: Optional[str] = None):
        """Initialize Supabase client."""
        self._url = url or settings.supabase_url
        self._key = key or settings.supabase_service_role_key
        self._client: Optional[Client] = None
        self._connect()

    def _connect(self):
        """Establish connection to Supabase."""
        try:
            self._client = create_client(self._url, self._key)
            logger.info("Supabase client initialized")
        except Exception as e:
            logger.error(f"Failed to connect to Supabase: {e}")
            raise PersistenceError(str(e), operation="connect")

    @property
    def client(self) -> Client:
        """Get raw Supabase client for direct queries."""
        if not self._client:
            self._connect()
        return self._client

    # ============================================================
    # Pagination Helper
    # ============================================================

    async def paginated_query(
        self,
        table: str,
        columns: str = "*",
        page_size: int = 1000,
        filters: Optional[Dict] = None,
        order_by: Optional[List[str]] = None,
        order_desc: bool = False
    ) -> List[Dict]:
        """
        Execute paginated query to load all results.

        PostgREST caps a single response at 1000 rows, so large
        galleries are read in ranges.

        Args:
            table: Table name
            columns: Columns to select
            page_size: Records per page
            filters: Optional equality filters (None means IS NULL)
            order_by: Columns to order by, in priority order
            order_desc: Descending order

        Returns:
            All matching records
        """
        all_data = []
        offset = 0

        while True:
            try:
                query = self.client.table(table).select(columns)

                if filters:
                    for key, value in filters.items():
                        if value is None:
                            query = query.is_(key, "null")
                        else:
                            query = query.eq(key, value)

                for column in order_by or []:
                    query = query.order(column, desc=order_desc)

                query = query.range(offset, offset + page_size - 1)
                response = query.execute()

            except Exception as e:
                logger.error(f"Paginated query failed: {table} - {e}")
                raise PersistenceError(str(e), operation=f"{table}.paginated_select")

            if not response.data:
                break

            all_data.extend(response.data)

            if len(response.data) < page_size:
                break

            offset += page_size
            logger.debug(f"Loaded {len(all_data)} records from {table}...")

        logger.debug(f"Loaded {len(all_data)} total records from {table}")
        return all_data

    # ============================================================
    # Type Conversion Utilities
    # ============================================================

    @staticmethod
    def clean_for_json(data: Dict) -> Dict:
        """Clean dict values for JSON serialization."""
        result = {}
        for key, value in data.items():
            if isinstance(value, (datetime, date)):
                result[key] = value.isoformat()
            elif isinstance(value, Enum):
                result[key] = value.value
            elif isinstance(value, BaseModel):
                result[key] = value.model_dump(exclude_none=True)
            else:
                result[key] = value
        return result


# ============================================================
# Global Instance
# ============================================================

_supabase_client: Optional[SupabaseClient] = None

def get_supabase_client() -> SupabaseClient:
    """Get singleton Supabase client instance."""
    global _supabase_client
    if _supabase_client is None:
        _supabase_client = SupabaseClient()
    return _supabase_client
