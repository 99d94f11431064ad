"""
Services package.

Main modules:
- selection.py - GallerySelectionManager (likes, submit/reopen, export)
- drive_sync.py - DriveSyncReconciler (Drive folder -> photo rows)
- galleries.py - GalleryService (create with rollback, reorder, delete)
- sources.py - SourceService (Drive folder sources)

Supporting modules:
- exporter.py - CSV / JSON export payloads
- ordering.py - Manual display ordering
"""

from services.selection import GallerySelectionManager
from services.drive_sync import DriveSyncReconciler
from services.galleries import GalleryService
from services.sources import SourceService

__all__ = [
    'GallerySelectionManager',
    'DriveSyncReconciler',
    'GalleryService',
    'SourceService',
]
