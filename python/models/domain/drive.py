"""
Google Drive sync models.
"""

from typing import Optional, List
from pydantic import BaseModel, Field


class RemoteFile(BaseModel):
    """File entry from a Drive folder listing."""
    
    id: str = Field(..., description="Drive file ID")
    name: str = Field(..., description="File name")
    mime_type: Optional[str] = Field(None, alias="mimeType")
    thumbnail_link: Optional[str] = Field(None, alias="thumbnailLink")
    
    class Config:
        populate_by_name = True


class RemotePage(BaseModel):
    """One page of a Drive folder listing."""
    
    files: List[RemoteFile] = Field(default_factory=list)
    next_page_token: Optional[str] = Field(None, alias="nextPageToken")
    
    class Config:
        populate_by_name = True


class SyncResult(BaseModel):
    """Outcome of a folder sync into a gallery."""
    
    gallery_id: str
    folder_id: str
    photo_count: int = Field(0, ge=0, description="Photos inserted by this run")
    eligible_count: int = Field(0, ge=0, description="Image files in the folder")
    skipped_count: int = Field(0, ge=0, description="Files already in the gallery")
