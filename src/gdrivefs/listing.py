# listing.py
import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

from .paths import path_join as default_path_join
from .responses import check_response
from .session import DriveClient
from .storage.dto import FOLDER_MIME_TYPE, FileEntry

PAGE_SIZE = 1000
LIST_FIELDS = "nextPageToken, files"

PathJoin = Callable[[Optional[str], str], str]


def build_query(container: FileEntry) -> Optional[str]:
    """Restricts the listing to the container's children; None lets Drive scope the root."""
    if container.bound:
        return f"'{container.id}' in parents"
    return None


async def iter_pages(
    client: DriveClient, query: Optional[str], page_size: int = PAGE_SIZE
) -> AsyncIterator[List[Dict[str, Any]]]:
    """
    Yields raw `files` pages until Drive stops returning a next page token.
    Pages are fetched on demand; empty pages do not end the sequence.
    """
    page_token = None
    page_number = 0

    while True:
        page_number += 1
        logging.debug(f"Fetching Google Drive listing page {page_number} (query: {query!r})")
        response = await client.files.list(
            page_token=page_token,
            page_size=page_size,
            fields=LIST_FIELDS,
            q=query,
        )
        result = check_response(response)
        page_token = result.get("nextPageToken")

        yield result.get("files", [])

        if not page_token:
            break


def parse_size(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Parses a Drive `size` field; missing or malformed values yield `default`."""
    # Google-native documents report no size at all
    try:
        return int(value, 10) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        return default


def is_authorized(resource: Dict[str, Any]) -> bool:
    return resource.get("isAppAuthorized") is True


def is_directory(resource: Dict[str, Any]) -> bool:
    return resource.get("mimeType") == FOLDER_MIME_TYPE


def to_entry(
    resource: Dict[str, Any],
    container: FileEntry,
    path_join: PathJoin = default_path_join,
) -> FileEntry:
    """Maps a raw Drive file resource into a FileEntry under `container`."""
    is_file = not is_directory(resource)
    parents = resource.get("parents") or [None]
    return FileEntry(
        is_file=is_file,
        is_directory=not is_file,
        mime=resource.get("mimeType") if is_file else None,
        size=parse_size(resource.get("size")) if is_file else None,
        path=path_join(container.path, resource["name"]),
        filename=resource["name"],
        id=resource.get("id"),
        parent_id=container.id or parents[0],
        stat={},
    )


async def list_entries(
    client: DriveClient,
    container: FileEntry,
    path_join: PathJoin = default_path_join,
    page_size: int = PAGE_SIZE,
) -> List[FileEntry]:
    """
    Lists every child of `container`, across all pages, keeping only the
    resources this application is authorized to see.
    """
    resources: List[Dict[str, Any]] = []
    async for page in iter_pages(client, build_query(container), page_size):
        resources.extend(page)

    return [
        to_entry(resource, container, path_join)
        for resource in resources
        if is_authorized(resource)
    ]
