"""
Source domain model.
A Google Drive folder that galleries are synced from.
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class Source(BaseModel):
    """Google Drive folder registered by the photographer."""
    
    id: str = Field(..., description="Unique source ID")
    name: str = Field(..., description="Display name")
    folder_id: str = Field(..., description="Google Drive folder ID")
    folder_url: str = Field(..., description="Folder URL as entered")
    display_order: int = Field(0, description="Manual ordering position")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    
    class Config:
        json_encoders = {
            datetime: lambda v: v.isoformat() if v else None
        }
