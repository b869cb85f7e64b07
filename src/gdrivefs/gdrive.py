# gdrive.py
from typing import Any, Dict, List, Mapping, Optional

import httpx

from .config import Settings, get_settings
from .listing import PathJoin, list_entries, parse_size
from .paths import path_join as default_path_join
from .request_builder import (
    RequestDescriptor,
    current_or_create,
    download_request,
    folder_resource,
    upload_request,
)
from .responses import (
    check_download_response,
    check_entry,
    check_response,
    check_unbound,
    check_upload_response,
)
from .session import DriveClient, SessionProvider
from .storage.base import FileSystemAdapter
from .storage.dto import FileEntry, ReadResult


class GoogleDriveAdapter(FileSystemAdapter):
    """
    File-system adapter backed by the Google Drive v3 API, implementing the
    FileSystemAdapter interface.

    Every operation logs in through the session provider first; the adapter
    keeps no session, cache or other state between calls.
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        path_join: PathJoin = default_path_join,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session_provider = session_provider
        self.path_join = path_join
        self.settings = settings or get_settings()
        self._transport = transport

    async def _before(self) -> DriveClient:
        return await self.session_provider.login()

    async def _send(self, descriptor: RequestDescriptor) -> httpx.Response:
        async with httpx.AsyncClient(
            transport=self._transport, timeout=self.settings.HTTP_TIMEOUT_SECONDS
        ) as http:
            return await http.request(
                descriptor.method,
                descriptor.url,
                headers=descriptor.headers,
                content=descriptor.body,
            )

    async def readdir(
        self, entry: FileEntry, options: Optional[Mapping[str, Any]] = None
    ) -> List[FileEntry]:
        client = await self._before()
        return await list_entries(
            client, entry, self.path_join, page_size=self.settings.GDRIVE_PAGE_SIZE
        )

    async def readfile(
        self, entry: FileEntry, options: Optional[Mapping[str, Any]] = None
    ) -> ReadResult:
        check_entry(entry)
        client = await self._before()
        descriptor = download_request(
            client.get_token(), entry.id, files_url=self.settings.GDRIVE_FILES_URL
        )
        response = await self._send(descriptor)
        return check_download_response(response, entry)

    async def writefile(
        self,
        entry: FileEntry,
        binary: bytes,
        options: Optional[Mapping[str, Any]] = None,
    ) -> int:
        client = await self._before()
        file_id = await current_or_create(client, entry)
        descriptor = upload_request(
            client.get_token(),
            file_id,
            entry,
            binary,
            upload_url=self.settings.GDRIVE_UPLOAD_URL,
        )
        response = await self._send(descriptor)
        result = check_upload_response(response)
        return parse_size(result.get("size"), default=0)

    async def mkdir(
        self, entry: FileEntry, options: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        check_unbound(entry)
        client = await self._before()
        response = await client.files.create(folder_resource(entry))
        return check_response(response)

    async def url(
        self, entry: FileEntry, options: Optional[Mapping[str, Any]] = None
    ) -> Optional[str]:
        check_entry(entry)
        client = await self._before()
        response = await client.files.get(entry.id, fields="webContentLink")
        return check_response(response).get("webContentLink")
