"""
Gallery and Photo domain models.
A gallery is a set of photos shared with one client for culling.
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from enum import Enum


class SelectionState(str, Enum):
    """Client selection state of a gallery."""
    EDITABLE = "editable"
    SUBMITTED = "submitted"


class SelectionFilter(str, Enum):
    """Photo filter predicates for selection views."""
    ALL = "all"
    LIKED = "liked"
    UNLIKED = "unliked"

    def matches(self, photo: "Photo") -> bool:
        if self is SelectionFilter.LIKED:
            return photo.is_liked
        if self is SelectionFilter.UNLIKED:
            return not photo.is_liked
        return True


class ExportFormat(str, Enum):
    """Export payload formats."""
    JSON = "json"
    CSV = "csv"


class PhotoMetadata(BaseModel):
    """Camera and exposure attributes captured at ingestion."""

    make: Optional[str] = None
    model: Optional[str] = None
    date_time: Optional[str] = None
    iso: Optional[int] = None
    f_number: Optional[float] = None
    exposure_time: Optional[float] = None
    focal_length: Optional[float] = None

    class Config:
        frozen = True


class Photo(BaseModel):
    """Photo in a gallery."""

    id: str = Field(..., description="Unique photo ID")
    gallery_id: str = Field(..., description="Owning gallery ID")

    filename: str = Field(..., description="Original filename, exported verbatim")
    remote_file_id: Optional[str] = Field(None, description="Google Drive file ID")
    preview_url: str = Field("", description="Displayable preview image URL")

    is_liked: bool = Field(False, description="Selected by the client")
    metadata: Optional[PhotoMetadata] = Field(None, description="Camera attributes")

    created_at: Optional[datetime] = Field(None, description="Ingestion timestamp")

    class Config:
        json_encoders = {
            datetime: lambda v: v.isoformat() if v else None
        }


class Gallery(BaseModel):
    """Client gallery."""

    id: str = Field(..., description="Unique gallery ID")
    title: str = Field(..., description="Gallery title")
    share_token: str = Field(..., description="Anonymous access token")

    source_id: Optional[str] = Field(None, description="Linked Drive source")
    selections_submitted: bool = Field(False, description="Client submitted selections")
    display_order: int = Field(0, description="Manual ordering position")

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    # Statistics (filled by listing queries)
    photo_count: Optional[int] = Field(None, ge=0, description="Total photos")
    liked_count: Optional[int] = Field(None, ge=0, description="Liked photos")

    @property
    def state(self) -> SelectionState:
        if self.selections_submitted:
            return SelectionState.SUBMITTED
        return SelectionState.EDITABLE

    class Config:
        json_encoders = {
            datetime: lambda v: v.isoformat() if v else None
        }


class SelectionCounts(BaseModel):
    """Photo counts per selection filter."""

    all: int = Field(0, ge=0)
    liked: int = Field(0, ge=0)
    unliked: int = Field(0, ge=0)

    def for_filter(self, selection_filter: SelectionFilter) -> int:
        return getattr(self, selection_filter.value)


class ToggleResult(BaseModel):
    """Outcome of a like toggle."""

    photo_id: str
    committed: bool
    prior_value: bool
    is_liked: bool
