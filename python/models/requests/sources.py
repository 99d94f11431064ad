"""
Source request models.
"""

from typing import Optional
from pydantic import BaseModel, Field


class SourceCreate(BaseModel):
    name: str = Field(..., description="Display name")
    folder_url: str = Field(..., description="Google Drive folder URL or ID")


class SourceUpdate(BaseModel):
    name: Optional[str] = None
    folder_url: Optional[str] = None
