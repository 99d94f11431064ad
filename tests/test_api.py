"""HTTP contract tests over the routers with in-memory stores."""

import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.handlers import install_exception_handlers
from fakes import remote
from routers import galleries, share, sources, sync

FOLDER = "1AbC_def-XYZ"


@pytest.fixture
def app(gallery_service, source_service, reconciler):
    app = FastAPI(redirect_slashes=False)
    install_exception_handlers(app)

    galleries.set_services(gallery_service, source_service)
    sources.set_services(source_service)
    share.set_services(gallery_service)
    sync.set_services(reconciler, gallery_service)

    app.include_router(sync.router, prefix="/api")
    app.include_router(sources.router, prefix="/api/sources")
    app.include_router(galleries.router, prefix="/api/galleries")
    app.include_router(share.router, prefix="/api/share")
    return app


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def gallery(client, drive_client):
    drive_client.pages[FOLDER] = [[remote("a.jpg"), remote("b.jpg")], [remote("c.ARW"), remote("x.txt")]]
    source = client.post("/api/sources", json={
        "name": "Club cup",
        "folder_url": f"https://drive.google.com/drive/folders/{FOLDER}",
    }).json()["data"]

    response = client.post("/api/galleries/", json={"title": "Final", "source_id": source["id"]})
    assert response.status_code == 200
    return response.json()["data"]["gallery"]


class TestSyncEndpoint:
    def test_success(self, client, galleries_repo, drive_client):
        drive_client.pages[FOLDER] = [[remote("a.jpg"), remote("readme.md")], [remote("b.ARW")]]
        target = galleries_repo.add(title="Empty", share_token="empty-token")

        response = client.post("/api/sync-google-drive", json={"folderId": FOLDER, "galleryId": target.id})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "photoCount": 2,
            "message": "Successfully synced 2 photos",
        }

    def test_missing_fields(self, client):
        response = client.post("/api/sync-google-drive", json={"folderId": FOLDER})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "VALIDATION_ERROR"
        assert "galleryId" in body["error"]

    def test_empty_field(self, client):
        response = client.post("/api/sync-google-drive", json={"folderId": "", "galleryId": "g"})
        assert response.status_code == 422
        assert response.json()["success"] is False

    def test_malformed_folder_reference(self, client, galleries_repo, drive_client):
        target = galleries_repo.add(title="Empty", share_token="empty-token")

        response = client.post("/api/sync-google-drive", json={
            "folderId": "not a url' or name contains '",
            "galleryId": target.id,
        })

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "INVALID_FOLDER_REFERENCE"
        assert drive_client.calls == []

    def test_folder_url_accepted(self, client, galleries_repo, drive_client):
        drive_client.pages[FOLDER] = [[remote("a.jpg")]]
        target = galleries_repo.add(title="Empty", share_token="empty-token")

        response = client.post("/api/sync-google-drive", json={
            "folderId": f"https://drive.google.com/drive/folders/{FOLDER}?usp=sharing",
            "galleryId": target.id,
        })

        assert response.status_code == 200
        assert response.json()["photoCount"] == 1
        assert drive_client.calls == [(FOLDER, None)]

    def test_unknown_gallery(self, client):
        response = client.post("/api/sync-google-drive", json={"folderId": FOLDER, "galleryId": "nope"})

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_inaccessible_folder(self, client, gallery):
        response = client.post("/api/sync-google-drive", json={"folderId": "private", "galleryId": gallery["id"]})

        assert response.status_code == 502
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "UPSTREAM_ERROR"
        assert body["error"] == "Failed to access Google Drive folder. Make sure it is publicly shared."

    def test_folder_without_images(self, client, gallery, drive_client):
        drive_client.pages["docs"] = [[remote("a.pdf")]]

        response = client.post("/api/sync-google-drive", json={"folderId": "docs", "galleryId": gallery["id"]})

        assert response.status_code == 422
        assert response.json()["error"] == "No image files found in the folder"

    def test_resync_inserts_nothing_new(self, client, gallery):
        response = client.post("/api/sync-google-drive", json={"folderId": FOLDER, "galleryId": gallery["id"]})

        assert response.status_code == 200
        assert response.json()["photoCount"] == 0


class TestGalleryEndpoints:
    def test_collection_routes_mounted(self, app):
        paths = {(route.path, method) for route in app.routes for method in getattr(route, "methods", ())}

        assert ("/api/galleries/", "GET") in paths
        assert ("/api/galleries/", "POST") in paths

    def test_create_lists_with_counts(self, client, gallery):
        listed = client.get("/api/galleries/").json()["data"]

        assert [g["id"] for g in listed] == [gallery["id"]]
        assert listed[0]["photo_count"] == 3
        assert listed[0]["liked_count"] == 0

    def test_create_with_unknown_source(self, client):
        response = client.post("/api/galleries/", json={"title": "Final", "source_id": "missing"})
        assert response.status_code == 404

    def test_photos_filter_and_toggle(self, client, gallery):
        photos = client.get(f"/api/galleries/{gallery['id']}/photos").json()["data"]["photos"]
        assert [p["filename"] for p in photos] == ["a.jpg", "b.jpg", "c.ARW"]

        toggled = client.post(f"/api/galleries/{gallery['id']}/photos/{photos[1]['id']}/toggle-like").json()["data"]
        assert toggled["is_liked"] is True
        assert toggled["counts"] == {"all": 3, "liked": 1, "unliked": 2}

        liked = client.get(f"/api/galleries/{gallery['id']}/photos", params={"filter": "liked"}).json()["data"]
        assert [p["filename"] for p in liked["photos"]] == ["b.jpg"]
        assert liked["counts"]["all"] == 3

    def test_unknown_filter(self, client, gallery):
        response = client.get(f"/api/galleries/{gallery['id']}/photos", params={"filter": "starred"})
        assert response.status_code == 422

    def test_export_csv(self, client, gallery):
        photos = client.get(f"/api/galleries/{gallery['id']}/photos").json()["data"]["photos"]
        for photo in (photos[2], photos[0]):
            client.post(f"/api/galleries/{gallery['id']}/photos/{photo['id']}/toggle-like")

        response = client.get(f"/api/galleries/{gallery['id']}/export", params={"format": "csv"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"].startswith('attachment; filename="selected-photos-')
        assert response.text == "filename\na.jpg\nc.ARW"

    def test_export_json(self, client, gallery):
        photos = client.get(f"/api/galleries/{gallery['id']}/photos").json()["data"]["photos"]
        client.post(f"/api/galleries/{gallery['id']}/photos/{photos[0]['id']}/toggle-like")

        response = client.get(f"/api/galleries/{gallery['id']}/export")
        payload = json.loads(response.text)

        assert response.headers["content-type"].startswith("application/json")
        assert payload["totalSelected"] == 1
        assert payload["filenames"] == ["a.jpg"]

    def test_delete(self, client, gallery, photos_repo):
        response = client.delete(f"/api/galleries/{gallery['id']}")

        assert response.json()["data"] == {"deleted": True, "deleted_photos": 3}
        assert photos_repo.rows == {}
        assert client.get(f"/api/galleries/{gallery['id']}").status_code == 404


class TestShareEndpoints:
    def test_client_flow(self, client, gallery):
        token = gallery["share_token"]

        opened = client.get(f"/api/share/{token}").json()["data"]
        assert opened["state"] == "editable"
        assert set(opened["photos"][0]) == {"id", "filename", "preview_url", "is_liked"}
        assert set(opened["gallery"]) == {"id", "title", "selections_submitted"}

        rejected = client.post(f"/api/share/{token}/submit")
        assert rejected.status_code == 409
        assert rejected.json()["code"] == "INVALID_STATE"

        photo_id = opened["photos"][0]["id"]
        client.post(f"/api/share/{token}/photos/{photo_id}/toggle-like")

        submitted = client.post(f"/api/share/{token}/submit").json()["data"]
        assert submitted["state"] == "submitted"

        locked = client.post(f"/api/share/{token}/photos/{photo_id}/toggle-like")
        assert locked.status_code == 409

        reopened = client.post(f"/api/share/{token}/reopen").json()["data"]
        assert reopened["state"] == "editable"
        assert reopened["counts"]["liked"] == 1

    def test_unknown_token(self, client):
        response = client.get("/api/share/does-not-exist")

        assert response.status_code == 404
        assert response.json()["success"] is False


class TestSourceEndpoints:
    def test_invalid_folder_reference(self, client):
        response = client.post("/api/sources", json={"name": "Bad", "folder_url": "https://example.com/?"})

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_FOLDER_REFERENCE"

    def test_bulk_delete_keeps_galleries_of_deleted_source(self, client, gallery):
        source_id = gallery["source_id"]

        response = client.post("/api/galleries/bulk-delete", json={"source_ids": [source_id]})

        assert response.status_code == 200
        assert client.get("/api/sources").json()["data"] == []
        kept = client.get(f"/api/galleries/{gallery['id']}").json()["data"]
        assert "source_id" not in kept
