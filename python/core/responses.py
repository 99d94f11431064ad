"""
Unified API response format.
All endpoints should return ApiResponse for consistency.
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from pydantic import BaseModel

T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """
    Unified API response wrapper.
    
    All API endpoints should return this format:
    {
        "success": true/false,
        "data": <payload or null>,
        "error": <error message or null>,
        "code": <error code for errors, null for success>,
        "meta": <optional metadata>
    }
    """
    
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    code: Optional[str] = None   # Error code at top level for frontend
    meta: Optional[Dict[str, Any]] = None
    
    @classmethod
    def ok(cls, data: T = None, meta: Dict[str, Any] = None) -> "ApiResponse[T]":
        """Create successful response."""
        return cls(success=True, data=data, meta=meta)
    
    @classmethod
    def fail(
        cls,
        message: str,
        code: str = "ERROR",
        meta: Dict[str, Any] = None,
    ) -> "ApiResponse":
        """Create error response."""
        return cls(success=False, error=message, code=code, meta=meta)
    
    @classmethod
    def from_exception(cls, exc: "AppException") -> "ApiResponse":
        """Create error response from AppException."""
        return cls(
            success=False,
            error=exc.message,
            code=exc.code,
            meta=exc.details or None
        )


# === Fixed-shape responses ===

class SyncResponse(BaseModel):
    """
    Response of the Drive sync endpoint.

    The frontend reads `photoCount` at the top level, so this one
    does not use the ApiResponse envelope.
    """
    
    success: bool = True
    photoCount: int
    message: str
    
    @classmethod
    def create(cls, photo_count: int) -> "SyncResponse":
        return cls(
            photoCount=photo_count,
            message=f"Successfully synced {photo_count} photos"
        )
