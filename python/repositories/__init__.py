"""
Repositories package - data access layer.

Repositories handle all database operations.
No business logic - only queries and data transformation.

Usage:
    from repositories import PhotosRepository
    
    repo = PhotosRepository(supabase_client)
    photos = await repo.list_by_gallery(gallery_id)
"""

from repositories.base import BaseRepository
from repositories.galleries_repo import GalleriesRepository
from repositories.photos_repo import PhotosRepository
from repositories.sources_repo import SourcesRepository
from repositories.interfaces import PhotoStore, GalleryStore, SourceStore

__all__ = [
    'BaseRepository',
    'GalleriesRepository',
    'PhotosRepository',
    'SourcesRepository',
    'PhotoStore',
    'GalleryStore',
    'SourceStore',
]
