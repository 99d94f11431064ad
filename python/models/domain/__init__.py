"""
Domain models - core business entities.

These are the source of truth for data structures.
All other layers (requests, repositories, services) derive from these.
"""

from models.domain.gallery import (
    Gallery,
    Photo,
    PhotoMetadata,
    SelectionState,
    SelectionFilter,
    SelectionCounts,
    ExportFormat,
    ToggleResult,
)
from models.domain.source import Source
from models.domain.drive import RemoteFile, RemotePage, SyncResult

__all__ = [
    'Gallery',
    'Photo',
    'PhotoMetadata',
    'SelectionState',
    'SelectionFilter',
    'SelectionCounts',
    'ExportFormat',
    'ToggleResult',
    'Source',
    'RemoteFile',
    'RemotePage',
    'SyncResult',
]
