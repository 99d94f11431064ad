from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from core.exceptions import EmptyResultError, PersistenceError, UpstreamError
from fakes import FakeDriveClient, InMemoryPhotoStore, remote
from models.domain.drive import RemoteFile
from services.drive_sync import (
    DriveSyncReconciler,
    extract_folder_id,
    filter_eligible,
    is_eligible,
    preview_url,
)

FOLDER = "1AbC_def-XYZ"


@pytest.mark.parametrize("value, expected", [
    ("https://drive.google.com/drive/folders/1AbC_def-XYZ", "1AbC_def-XYZ"),
    ("https://drive.google.com/drive/folders/1AbC_def-XYZ?usp=sharing", "1AbC_def-XYZ"),
    ("https://drive.google.com/drive/u/0/folders/1AbC_def-XYZ", "1AbC_def-XYZ"),
    ("https://drive.google.com/open?id=1AbC_def-XYZ", "1AbC_def-XYZ"),
    ("1AbC_def-XYZ", "1AbC_def-XYZ"),
    ("  1AbC_def-XYZ  ", "1AbC_def-XYZ"),
    ("https://x.com/open?id=XYZ789", "XYZ789"),
    ("https://example.com/not a folder", None),
    ("not a url", None),
    ("", None),
    (None, None),
])
def test_extract_folder_id(value, expected):
    assert extract_folder_id(value) == expected


def test_folders_segment_wins_over_id_param():
    assert extract_folder_id("https://drive.google.com/drive/folders/first?id=second") == "first"


@pytest.mark.parametrize("name, eligible", [
    ("DSC_0001.ARW", True),
    ("dsc_0001.arw", True),
    ("photo.JPEG", True),
    ("photo.jpg", True),
    ("scan.png", True),
    ("IMG_1.CR2", True),
    ("IMG_1.nef", True),
    ("notes.txt", False),
    ("clip.mp4", False),
    ("arw", False),
    ("photo.jpg.xmp", False),
])
def test_is_eligible(name, eligible):
    assert is_eligible(name) is eligible


def test_filter_eligible_preserves_order():
    files = [remote("b.jpg"), remote("readme.txt"), remote("a.ARW"), remote("c.png")]
    assert [f.name for f in filter_eligible(files)] == ["b.jpg", "a.ARW", "c.png"]


def test_preview_url():
    assert preview_url("abc", 1000) == "https://drive.google.com/thumbnail?id=abc&sz=w1000"


def test_remote_file_accepts_api_field_names():
    parsed = RemoteFile.model_validate({"id": "x", "name": "a.jpg", "mimeType": "image/jpeg"})
    assert parsed.mime_type == "image/jpeg"


class TestListing:
    async def test_collects_every_page(self, photos_repo):
        client = FakeDriveClient({FOLDER: [
            [remote("a.jpg"), remote("b.jpg")],
            [remote("c.jpg")],
            [remote("d.jpg")],
        ]})
        reconciler = DriveSyncReconciler(client, photos_repo)

        files = await reconciler.list_folder_files(FOLDER)

        assert [f.name for f in files] == ["a.jpg", "b.jpg", "c.jpg", "d.jpg"]
        assert client.calls == [(FOLDER, None), (FOLDER, "p1"), (FOLDER, "p2")]

    async def test_unexpected_client_error_becomes_upstream(self, photos_repo):
        class BrokenClient:
            async def fetch_page(self, folder_id, page_token=None):
                raise RuntimeError("boom")

        reconciler = DriveSyncReconciler(BrokenClient(), photos_repo)

        with pytest.raises(UpstreamError) as exc_info:
            await reconciler.list_folder_files(FOLDER)
        assert exc_info.value.details["folder_id"] == FOLDER


class TestSync:
    async def test_inserts_eligible_files(self, photos_repo):
        client = FakeDriveClient({FOLDER: [
            [remote("a.jpg"), remote("notes.txt")],
            [remote("b.ARW")],
        ]})
        reconciler = DriveSyncReconciler(client, photos_repo, preview_width=800)

        result = await reconciler.sync_to_gallery(FOLDER, "g1")

        assert result.photo_count == 2
        assert result.eligible_count == 2
        assert result.skipped_count == 0
        assert photos_repo.insert_calls == 1

        photos = await photos_repo.list_by_gallery("g1")
        assert [p.filename for p in photos] == ["a.jpg", "b.ARW"]
        assert all(not p.is_liked for p in photos)
        assert photos[0].remote_file_id == "id-a.jpg"
        assert photos[0].preview_url == "https://drive.google.com/thumbnail?id=id-a.jpg&sz=w800"

    async def test_failure_on_later_page_inserts_nothing(self, photos_repo):
        client = FakeDriveClient(
            {FOLDER: [[remote("a.jpg")], [remote("b.jpg")], [remote("c.jpg")]]},
            fail_on_page=2,
        )
        reconciler = DriveSyncReconciler(client, photos_repo)

        with pytest.raises(UpstreamError):
            await reconciler.sync_to_gallery(FOLDER, "g1")

        assert photos_repo.insert_calls == 0
        assert await photos_repo.count_by_gallery("g1") == 0

    async def test_inaccessible_folder(self, photos_repo):
        reconciler = DriveSyncReconciler(FakeDriveClient(), photos_repo)

        with pytest.raises(UpstreamError) as exc_info:
            await reconciler.sync_to_gallery("private-folder", "g1")
        assert exc_info.value.status_code == 502

    async def test_no_images(self, photos_repo):
        client = FakeDriveClient({FOLDER: [[remote("a.txt"), remote("b.mov")]]})
        reconciler = DriveSyncReconciler(client, photos_repo)

        with pytest.raises(EmptyResultError) as exc_info:
            await reconciler.sync_to_gallery(FOLDER, "g1")

        assert exc_info.value.message == "No image files found in the folder"
        assert exc_info.value.details["total_files"] == 2
        assert photos_repo.insert_calls == 0

    async def test_empty_folder(self, photos_repo):
        client = FakeDriveClient({FOLDER: [[]]})
        reconciler = DriveSyncReconciler(client, photos_repo)

        with pytest.raises(EmptyResultError):
            await reconciler.sync_to_gallery(FOLDER, "g1")

    async def test_rerun_is_idempotent(self, photos_repo):
        client = FakeDriveClient({FOLDER: [[remote("a.jpg"), remote("b.jpg")]]})
        reconciler = DriveSyncReconciler(client, photos_repo)

        first = await reconciler.sync_to_gallery(FOLDER, "g1")
        second = await reconciler.sync_to_gallery(FOLDER, "g1")

        assert first.photo_count == 2
        assert second.photo_count == 0
        assert second.skipped_count == 2
        assert await photos_repo.count_by_gallery("g1") == 2

    async def test_rerun_picks_up_new_files(self, photos_repo):
        pages = {FOLDER: [[remote("a.jpg")]]}
        reconciler = DriveSyncReconciler(FakeDriveClient(pages), photos_repo)
        await reconciler.sync_to_gallery(FOLDER, "g1")

        pages[FOLDER] = [[remote("a.jpg"), remote("b.jpg")]]
        result = await reconciler.sync_to_gallery(FOLDER, "g1")

        assert result.photo_count == 1
        photos = await photos_repo.list_by_gallery("g1")
        assert [p.filename for p in photos] == ["a.jpg", "b.jpg"]

    async def test_duplicate_ids_in_listing(self, photos_repo):
        client = FakeDriveClient({FOLDER: [[remote("a.jpg", "same")], [remote("a copy.jpg", "same")]]})
        reconciler = DriveSyncReconciler(client, photos_repo)

        result = await reconciler.sync_to_gallery(FOLDER, "g1")

        assert result.photo_count == 1
        assert result.skipped_count == 1

    async def test_same_folder_into_two_galleries(self, photos_repo):
        client = FakeDriveClient({FOLDER: [[remote("a.jpg")]]})
        reconciler = DriveSyncReconciler(client, photos_repo)

        await reconciler.sync_to_gallery(FOLDER, "g1")
        result = await reconciler.sync_to_gallery(FOLDER, "g2")

        assert result.photo_count == 1

    async def test_insert_failure_propagates(self, photos_repo):
        photos_repo.fail_on.add("insert_many")
        client = FakeDriveClient({FOLDER: [[remote("a.jpg")]]})
        reconciler = DriveSyncReconciler(client, photos_repo)

        with pytest.raises(PersistenceError):
            await reconciler.sync_to_gallery(FOLDER, "g1")
        assert await photos_repo.count_by_gallery("g1") == 0

    async def test_listing_order_survives_shared_insert_time(self):
        frozen = datetime(2024, 1, 1, tzinfo=timezone.utc)
        photos_repo = InMemoryPhotoStore(clock=SimpleNamespace(now=lambda: frozen))
        client = FakeDriveClient({FOLDER: [
            [remote("003.ARW", "f3c1"), remote("001.ARW", "0a9d")],
            [remote("002.ARW", "7b22")],
        ]})
        reconciler = DriveSyncReconciler(client, photos_repo)

        await reconciler.sync_to_gallery(FOLDER, "g1")

        photos = await photos_repo.list_by_gallery("g1")
        assert [p.filename for p in photos] == ["003.ARW", "001.ARW", "002.ARW"]


def test_photo_rows_are_stamped_in_listing_order(photos_repo):
    reconciler = DriveSyncReconciler(FakeDriveClient(), photos_repo)
    ingested_at = datetime(2024, 5, 1, 12, tzinfo=timezone.utc)

    rows = reconciler.build_photo_rows("g1", [remote("b.jpg"), remote("a.jpg")], ingested_at=ingested_at)

    assert [row["filename"] for row in rows] == ["b.jpg", "a.jpg"]
    assert rows[0]["created_at"] == ingested_at
    assert rows[1]["created_at"] == ingested_at + timedelta(milliseconds=1)
