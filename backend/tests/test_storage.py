"""Tests for the image bucket access policy and storage endpoints."""

import threading

import pytest

from campus_portal.core.errors import ValidationError
from campus_portal.main import app
from campus_portal.services.storage_service import (
    LocalObjectStore,
    can_modify,
    can_read,
    get_object_store,
    split_object_path,
)


def test_owner_folder_policy():
    assert can_modify("user-1", "app-images", "user-1/logo.png")
    assert can_modify("user-1", "app-images", "user-1/clubs/logo.png")
    assert not can_modify("user-1", "app-images", "user-2/logo.png")
    assert not can_modify("user-1", "app-images", "logo.png")
    assert not can_modify("user-1", "documents", "user-1/logo.png")


def test_only_image_bucket_is_public():
    assert can_read("app-images")
    assert not can_read("documents")


@pytest.mark.parametrize("path", ["", "user-1/../user-2/logo.png", "user-1//logo.png", "./logo.png"])
def test_unsafe_paths_rejected(path):
    with pytest.raises(ValidationError):
        split_object_path(path)


@pytest.mark.asyncio
async def test_owner_upload_then_public_read_and_delete(client, auth_headers):
    put = await client.put("/api/v1/storage/app-images/user-1/logo.png", content=b"\x89PNG", headers=auth_headers)
    assert put.status_code == 201
    assert put.json() == {"bucket": "app-images", "path": "user-1/logo.png", "size": 4}

    got = await client.get("/api/v1/storage/app-images/user-1/logo.png")
    assert got.status_code == 200
    assert got.content == b"\x89PNG"
    assert got.headers["content-type"] == "image/png"

    deleted = await client.delete("/api/v1/storage/app-images/user-1/logo.png", headers=auth_headers)
    assert deleted.status_code == 204

    gone = await client.get("/api/v1/storage/app-images/user-1/logo.png")
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_other_users_folder_is_forbidden(client, auth_headers, other_headers):
    await client.put("/api/v1/storage/app-images/user-1/logo.png", content=b"a", headers=auth_headers)

    overwrite = await client.put("/api/v1/storage/app-images/user-1/logo.png", content=b"b", headers=other_headers)
    assert overwrite.status_code == 403
    assert overwrite.json() == {"error": "Forbidden"}

    delete = await client.delete("/api/v1/storage/app-images/user-1/logo.png", headers=other_headers)
    assert delete.status_code == 403

    got = await client.get("/api/v1/storage/app-images/user-1/logo.png")
    assert got.content == b"a"


@pytest.mark.asyncio
async def test_bucket_root_and_other_buckets_forbidden(client, auth_headers):
    root = await client.put("/api/v1/storage/app-images/logo.png", content=b"a", headers=auth_headers)
    assert root.status_code == 403

    other_bucket = await client.put("/api/v1/storage/documents/user-1/cv.pdf", content=b"a", headers=auth_headers)
    assert other_bucket.status_code == 403

    read_other = await client.get("/api/v1/storage/documents/user-1/cv.pdf")
    assert read_other.status_code == 403


@pytest.mark.asyncio
async def test_upload_requires_auth(client):
    resp = await client.put("/api/v1/storage/app-images/user-1/logo.png", content=b"a")
    assert resp.status_code == 401


class ThreadRecordingStore(LocalObjectStore):
    def __init__(self, root) -> None:
        super().__init__(root)
        self.threads: list[int] = []

    def put(self, caller_id, bucket, object_path, data):
        self.threads.append(threading.get_ident())
        super().put(caller_id, bucket, object_path, data)

    def get(self, bucket, object_path):
        self.threads.append(threading.get_ident())
        return super().get(bucket, object_path)

    def delete(self, caller_id, bucket, object_path):
        self.threads.append(threading.get_ident())
        super().delete(caller_id, bucket, object_path)


@pytest.mark.asyncio
async def test_file_io_runs_off_the_event_loop(client, auth_headers, tmp_path):
    store = ThreadRecordingStore(tmp_path / "threaded")
    app.dependency_overrides[get_object_store] = lambda: store
    loop_thread = threading.get_ident()

    await client.put("/api/v1/storage/app-images/user-1/a.png", content=b"a", headers=auth_headers)
    await client.get("/api/v1/storage/app-images/user-1/a.png")
    await client.delete("/api/v1/storage/app-images/user-1/a.png", headers=auth_headers)

    assert len(store.threads) == 3
    assert loop_thread not in store.threads
