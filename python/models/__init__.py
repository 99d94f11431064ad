"""
Models package - data structures for the application.

Subpackages:
- domain/ - Domain models (core business entities)
- requests/ - Request DTOs (API input)
"""

# Re-export commonly used models
from models.domain import (
    Gallery,
    Photo,
    PhotoMetadata,
    Source,
    RemoteFile,
    SyncResult,
    ToggleResult,
)

__all__ = [
    # Gallery
    'Gallery',
    'Photo',
    'PhotoMetadata',
    'ToggleResult',
    # Source
    'Source',
    # Drive
    'RemoteFile',
    'SyncResult',
]
