# tests/test_request_builder.py
import pytest

from gdrivefs.exceptions import RemoteApiError
from gdrivefs.request_builder import (
    current_or_create,
    download_request,
    file_resource,
    folder_resource,
    upload_request,
)
from gdrivefs.session import ApiErrorBody, ApiResponse, Token
from gdrivefs.storage.dto import FileEntry

TOKEN = Token(token_type="Bearer", access_token="abc123")


def test_download_request():
    descriptor = download_request(TOKEN, "f1")

    assert descriptor.method == "GET"
    assert descriptor.url == "https://www.googleapis.com/drive/v3/files/f1?alt=media"
    assert descriptor.headers == {"Authorization": "Bearer abc123"}
    assert descriptor.body is None


def test_upload_request_uses_entry_mime():
    entry = FileEntry(is_file=True, id="f1", mime="text/plain")
    descriptor = upload_request(TOKEN, "f1", entry, b"data")

    assert descriptor.method == "PATCH"
    assert descriptor.url == "https://www.googleapis.com/upload/drive/v3/files/f1?uploadType=media"
    assert descriptor.headers == {"Content-Type": "text/plain", "Authorization": "Bearer abc123"}
    assert descriptor.body == b"data"


def test_upload_request_falls_back_to_octet_stream():
    descriptor = upload_request(TOKEN, "f1", FileEntry(is_file=True), b"data", upload_url="http://local/up")

    assert descriptor.url == "http://local/up/f1?uploadType=media"
    assert descriptor.headers["Content-Type"] == "application/octet-stream"


def test_file_resource_from_filename():
    entry = FileEntry(is_file=True, filename="x.txt", parent_id="p1")
    assert file_resource(entry) == {
        "name": "x.txt",
        "parents": ["p1"],
        "mimeType": "application/octet-stream",
    }


def test_file_resource_name_from_path_without_parent():
    entry = FileEntry(is_file=True, path="/docs/report.pdf", mime="application/pdf")
    assert file_resource(entry) == {
        "name": "report.pdf",
        "parents": [],
        "mimeType": "application/pdf",
    }


def test_folder_resource():
    entry = FileEntry(is_directory=True, path="/docs/new", parent_id="docs_id")
    assert folder_resource(entry) == {
        "name": "new",
        "parents": ["docs_id"],
        "mimeType": "application/vnd.google-apps.folder",
    }


@pytest.mark.asyncio
async def test_current_or_create_bound_entry(drive_client):
    file_id = await current_or_create(drive_client, FileEntry(is_file=True, id="existing"))

    assert file_id == "existing"
    drive_client.files.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_current_or_create_unbound_entry(drive_client):
    entry = FileEntry(is_file=True, filename="x.txt", parent_id="p1")

    file_id = await current_or_create(drive_client, entry)

    assert file_id == "new_id"
    drive_client.files.create.assert_awaited_once_with(
        {"name": "x.txt", "parents": ["p1"], "mimeType": "application/octet-stream"}
    )


@pytest.mark.asyncio
async def test_current_or_create_propagates_api_error(drive_client):
    drive_client.files.create.return_value = ApiResponse(
        error=ApiErrorBody(message="Insufficient permissions", code=403)
    )

    with pytest.raises(RemoteApiError, match="Insufficient permissions"):
        await current_or_create(drive_client, FileEntry(is_file=True, filename="x.txt"))
