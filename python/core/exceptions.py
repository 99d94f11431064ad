"""
Custom exception hierarchy for the application.
All exceptions inherit from AppException for unified handling.

Each failure class maps to exactly one user-facing message so the
caller can pick the right wording and compensation step:
- ValidationError   - bad input (folder reference, empty names)
- UpstreamError     - Google Drive listing failed or folder not shared
- EmptyResultError  - no eligible image files in the folder
- PersistenceError  - the store rejected a write
- InvalidStateError - operation not allowed in the gallery's current state
"""

from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        status_code: HTTP status code for API responses
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        code: str = "ERROR",
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# === Not Found Errors ===

class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, entity: str, identifier: str = None):
        message = f"{entity} not found"
        if identifier:
            message = f"{entity} '{identifier}' not found"
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404
        )


class GalleryNotFoundError(NotFoundError):
    def __init__(self, gallery_id: str):
        super().__init__("Gallery", gallery_id)


class PhotoNotFoundError(NotFoundError):
    def __init__(self, photo_id: str):
        super().__init__("Photo", photo_id)


class SourceNotFoundError(NotFoundError):
    def __init__(self, source_id: str):
        super().__init__("Source", source_id)


# === Validation Errors ===

class ValidationError(AppException):
    """Input validation failed."""

    def __init__(self, message: str, field: str = None, code: str = "VALIDATION_ERROR"):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code=code,
            status_code=422,
            details=details
        )


class InvalidFolderReferenceError(ValidationError):
    def __init__(self, field: str = "folder_url"):
        super().__init__(
            message="Could not extract folder ID from the URL",
            field=field,
            code="INVALID_FOLDER_REFERENCE"
        )


# === Upstream (Google Drive) Errors ===

class UpstreamError(AppException):
    """Remote listing failed or the folder is not accessible."""

    def __init__(
        self,
        message: str = "Failed to access Google Drive folder. Make sure it is publicly shared.",
        folder_id: str = None,
        upstream_status: int = None
    ):
        details = {}
        if folder_id:
            details["folder_id"] = folder_id
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(
            message=message,
            code="UPSTREAM_ERROR",
            status_code=502,
            details=details
        )


class EmptyResultError(AppException):
    """No eligible image files were found after filtering."""

    def __init__(self, folder_id: str = None, total_files: int = 0):
        details = {"total_files": total_files}
        if folder_id:
            details["folder_id"] = folder_id
        super().__init__(
            message="No image files found in the folder",
            code="EMPTY_RESULT",
            status_code=422,
            details=details
        )


# === Persistence Errors ===

class PersistenceError(AppException):
    """Store write (or read) failed."""

    def __init__(self, message: str, operation: str = None, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if operation:
            details["operation"] = operation
        super().__init__(
            message=f"Could not save changes: {message}",
            code="PERSISTENCE_ERROR",
            status_code=500,
            details=details
        )


# === State Errors ===

class InvalidStateError(AppException):
    """Operation not permitted in the gallery's current state."""

    def __init__(self, message: str, state: str = None):
        details = {"state": state} if state else {}
        super().__init__(
            message=message,
            code="INVALID_STATE",
            status_code=409,
            details=details
        )


class SelectionsSubmittedError(InvalidStateError):
    def __init__(self):
        super().__init__(
            message="Selections have already been submitted",
            state="submitted"
        )


class NoSelectionsError(InvalidStateError):
    def __init__(self):
        super().__init__(
            message="Select at least one photo before submitting",
            state="editable"
        )


# === Configuration Errors ===

class ConfigurationError(AppException):
    """Required server configuration is missing."""

    def __init__(self, message: str, setting: str = None):
        details = {"setting": setting} if setting else {}
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            status_code=500,
            details=details
        )
