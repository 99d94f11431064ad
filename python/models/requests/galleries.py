"""
Gallery request models.
"""

from typing import Optional, List
from pydantic import BaseModel, Field


class GalleryCreate(BaseModel):
    title: str = Field(..., description="Gallery title")
    source_id: str = Field(..., description="Source (Drive folder) to sync from")


class GalleryUpdate(BaseModel):
    title: Optional[str] = None
    source_id: Optional[str] = None


class BulkDeleteRequest(BaseModel):
    source_ids: List[str] = Field(default_factory=list)
    gallery_ids: List[str] = Field(default_factory=list)
