"""
Request DTOs - API input models.
Used for validating incoming API requests.
"""

from models.requests.common import ReorderRequest, MoveRequest
from models.requests.galleries import GalleryCreate, GalleryUpdate, BulkDeleteRequest
from models.requests.sources import SourceCreate, SourceUpdate
from models.requests.sync import SyncRequest

__all__ = [
    # Common
    'ReorderRequest',
    'MoveRequest',
    # Galleries
    'GalleryCreate',
    'GalleryUpdate',
    'BulkDeleteRequest',
    # Sources
    'SourceCreate',
    'SourceUpdate',
    # Sync
    'SyncRequest',
]
