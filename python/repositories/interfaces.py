"""
Repository interfaces.

Services depend on these protocols only, so any store with the same
methods (Supabase-backed repositories, in-memory fakes) can be injected.
"""

from typing import Optional, List, Dict, Any, Set, Protocol

from models.domain.gallery import Gallery, Photo
from models.domain.source import Source


class PhotoStore(Protocol):
    async def list_by_gallery(self, gallery_id: str) -> List[Photo]: ...

    async def get_remote_file_ids(self, gallery_id: str) -> Set[str]: ...

    async def count_by_gallery(self, gallery_id: str, is_liked: Optional[bool] = None) -> int: ...

    async def insert_many(self, rows: List[Dict[str, Any]]) -> List[Photo]: ...

    async def set_liked(self, photo_id: str, is_liked: bool) -> Photo: ...

    async def delete_by_gallery(self, gallery_id: str) -> int: ...


class GalleryStore(Protocol):
    async def get_by_id(self, id: str) -> Optional[Gallery]: ...

    async def get_by_id_or_raise(self, id: str) -> Gallery: ...

    async def get_by_share_token(self, share_token: str) -> Optional[Gallery]: ...

    async def list_ordered(self) -> List[Gallery]: ...

    async def create(self, data: Dict[str, Any]) -> Gallery: ...

    async def update(self, id: str, data: Dict[str, Any]) -> Gallery: ...

    async def set_display_order(self, id: str, display_order: int) -> Gallery: ...

    async def detach_source(self, source_id: str) -> int: ...

    async def delete(self, id: str) -> bool: ...


class SourceStore(Protocol):
    async def get_by_id(self, id: str) -> Optional[Source]: ...

    async def get_by_id_or_raise(self, id: str) -> Source: ...

    async def list_ordered(self) -> List[Source]: ...

    async def create(self, data: Dict[str, Any]) -> Source: ...

    async def update(self, id: str, data: Dict[str, Any]) -> Source: ...

    async def set_display_order(self, id: str, display_order: int) -> Source: ...

    async def delete(self, id: str) -> bool: ...
