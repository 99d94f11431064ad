"""
Shared fixtures.

Settings are read at import time, so required environment variables are
seeded before any application module is imported.
"""

import os

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

import pytest

from fakes import (
    FakeDriveClient,
    InMemoryGalleryStore,
    InMemoryPhotoStore,
    InMemorySourceStore,
    _Clock,
)
from services.drive_sync import DriveSyncReconciler
from services.galleries import GalleryService
from services.sources import SourceService


@pytest.fixture
def clock():
    return _Clock()


@pytest.fixture
def photos_repo(clock):
    return InMemoryPhotoStore(clock)


@pytest.fixture
def galleries_repo(clock):
    return InMemoryGalleryStore(clock)


@pytest.fixture
def sources_repo(clock):
    return InMemorySourceStore(clock)


@pytest.fixture
def drive_client():
    return FakeDriveClient()


@pytest.fixture
def reconciler(drive_client, photos_repo):
    return DriveSyncReconciler(drive_client, photos_repo, preview_width=1000)


@pytest.fixture
def gallery_service(galleries_repo, photos_repo, sources_repo, reconciler):
    return GalleryService(galleries_repo, photos_repo, sources_repo, reconciler)


@pytest.fixture
def source_service(sources_repo, galleries_repo):
    return SourceService(sources_repo, galleries_repo)
