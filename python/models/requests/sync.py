"""
Drive sync request model.
Field names follow the frontend contract (camelCase).
"""

from pydantic import BaseModel, Field


class SyncRequest(BaseModel):
    folder_id: str = Field(..., alias="folderId", min_length=1)
    gallery_id: str = Field(..., alias="galleryId", min_length=1)
    
    class Config:
        populate_by_name = True
