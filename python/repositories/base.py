"""
Base repository with common functionality.
"""

import time
from typing import Optional, List, Dict, Any, TypeVar, Generic
from pydantic import BaseModel

from core.exceptions import AppException, PersistenceError, NotFoundError
from core.logging import get_logger, log_db_query

logger = get_logger(__name__)

T = TypeVar('T', bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository providing common database operations.

    Subclasses should:
    - Set `table_name` class attribute
    - Set `entity_name` class attribute (used in NotFoundError)
    - Implement `_to_model`
    """

    table_name: str = None
    entity_name: str = None

    def __init__(self, supabase_client):
        """
        Initialize repository.

        Args:
            supabase_client: SupabaseClient instance (from infrastructure/)
        """
        self.client = supabase_client
        self.logger = get_logger(f"repo.{self.__class__.__name__}")

    @property
    def table(self):
        """Get table reference for queries."""
        return self.client.client.table(self.table_name)

    # ============================================================
    # Generic CRUD Operations
    # ============================================================

    async def get_by_id(self, id: str) -> Optional[T]:
        """
        Get single record by ID.

        Args:
            id: Record ID

        Returns:
            Model instance or None
        """
        try:
            response = self._timed("select", lambda: self.table.select("*").eq("id", id).execute())
        except Exception as e:
            self._handle_error("get_by_id", e)

        if not response.data:
            return None

        return self._to_model(response.data[0])

    async def get_by_id_or_raise(self, id: str) -> T:
        """
        Get single record by ID or raise NotFoundError.
        """
        result = await self.get_by_id(id)
        if result is None:
            raise NotFoundError(self.entity_name, id)
        return result

    async def list_ordered(self) -> List[T]:
        """
        Get all records in manual display order.

        Ties on display_order fall back to created_at, then id.
        """
        try:
            response = self._timed("select", lambda: (
                self.table
                .select("*")
                .order("display_order")
                .order("created_at")
                .order("id")
                .execute()
            ))
        except Exception as e:
            self._handle_error("list_ordered", e)

        return [self._to_model(row) for row in response.data or []]

    async def count(self, filters: Dict[str, Any] = None) -> int:
        """
        Count records matching filters.
        """
        try:
            query = self.table.select("id", count="exact")

            if filters:
                for key, value in filters.items():
                    if value is None:
                        query = query.is_(key, "null")
                    else:
                        query = query.eq(key, value)

            response = self._timed("count", query.execute)
        except Exception as e:
            self._handle_error("count", e)

        return response.count or 0

    async def create(self, data: Dict[str, Any]) -> T:
        """
        Create new record.
        """
        try:
            clean_data = self.client.clean_for_json(data)
            response = self._timed("insert", lambda: self.table.insert(clean_data).execute())
        except Exception as e:
            self._handle_error("create", e)

        if not response.data:
            raise PersistenceError("Insert returned no data", operation=f"{self.table_name}.create")

        return self._to_model(response.data[0])

    async def update(self, id: str, data: Dict[str, Any]) -> T:
        """
        Update existing record.
        """
        try:
            clean_data = self.client.clean_for_json(data)
            response = self._timed("update", lambda: self.table.update(clean_data).eq("id", id).execute())
        except Exception as e:
            self._handle_error("update", e)

        if not response.data:
            raise NotFoundError(self.entity_name, id)

        return self._to_model(response.data[0])

    async def set_display_order(self, id: str, display_order: int) -> T:
        """Persist one manual ordering position."""
        return await self.update(id, {"display_order": display_order})

    async def delete(self, id: str) -> bool:
        """
        Delete record by ID.
        """
        try:
            response = self._timed("delete", lambda: self.table.delete().eq("id", id).execute())
        except Exception as e:
            self._handle_error("delete", e)

        return len(response.data or []) > 0

    # ============================================================
    # Helper Methods
    # ============================================================

    def _to_model(self, data: Dict) -> T:
        """
        Convert database row to model instance.
        Override in subclasses for custom transformation.
        """
        raise NotImplementedError

    def _timed(self, operation: str, execute):
        """Run a query callable and log its duration."""
        started = time.perf_counter()
        response = execute()
        log_db_query(self.logger, operation, self.table_name, (time.perf_counter() - started) * 1000)
        return response

    def _handle_error(self, operation: str, error: Exception):
        """
        Handle database error with logging.
        """
        if isinstance(error, AppException):
            raise error
        self.logger.error(f"{operation} failed: {error}")
        raise PersistenceError(str(error), operation=f"{self.table_name}.{operation}")
