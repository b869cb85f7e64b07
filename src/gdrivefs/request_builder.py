# request_builder.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .paths import basename
from .responses import check_response
from .session import DriveClient, Token
from .storage.dto import DEFAULT_MIME_TYPE, FOLDER_MIME_TYPE, FileEntry

FILES_URL = "https://www.googleapis.com/drive/v3/files"
UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3/files"


class RequestDescriptor(BaseModel):
    """Everything needed to send a raw HTTP request."""

    method: str
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None


def download_request(token: Token, file_id: str, files_url: str = FILES_URL) -> RequestDescriptor:
    return RequestDescriptor(
        method="GET",
        url=f"{files_url}/{file_id}?alt=media",
        headers={"Authorization": token.authorization},
    )


def upload_request(
    token: Token,
    file_id: str,
    entry: FileEntry,
    body: bytes,
    upload_url: str = UPLOAD_URL,
) -> RequestDescriptor:
    return RequestDescriptor(
        method="PATCH",
        url=f"{upload_url}/{file_id}?uploadType=media",
        headers={
            "Content-Type": entry.mime or DEFAULT_MIME_TYPE,
            "Authorization": token.authorization,
        },
        body=body,
    )


def _resource(entry: FileEntry, mime_type: str) -> Dict[str, Any]:
    return {
        "name": entry.filename or basename(entry.path),
        "parents": [entry.parent_id] if entry.parent_id else [],
        "mimeType": mime_type,
    }


def file_resource(entry: FileEntry) -> Dict[str, Any]:
    """Metadata body for creating a file."""
    return _resource(entry, entry.mime or DEFAULT_MIME_TYPE)


def folder_resource(entry: FileEntry) -> Dict[str, Any]:
    """Metadata body for creating a folder."""
    return _resource(entry, FOLDER_MIME_TYPE)


async def current_or_create(client: DriveClient, entry: FileEntry) -> str:
    """
    Resolves the remote id an upload should target.

    A bound entry resolves to its own id. An unbound entry is created remotely
    first and resolves to the id Drive assigned to it.
    """
    if entry.bound:
        return entry.id

    response = await client.files.create(file_resource(entry))
    return check_response(response)["id"]
