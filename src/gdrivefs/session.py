# session.py
import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from pydantic import BaseModel, Field

from .exceptions import ConfigurationError


class Token(BaseModel):
    """Short-lived credential bundle used to sign raw media requests."""

    token_type: str = "Bearer"
    access_token: str

    @property
    def authorization(self) -> str:
        return f"{self.token_type} {self.access_token}"


class ApiErrorBody(BaseModel):
    message: str
    code: Optional[int] = None


class ApiResponse(BaseModel):
    """
    Structured Drive API response: either a `result` payload or an `error`.
    """

    result: Dict[str, Any] = Field(default_factory=dict)
    error: Optional[ApiErrorBody] = None


def _error_message(error: HttpError) -> str:
    """Extracts the provider's message from an HttpError body."""
    try:
        content = error.content
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        return json.loads(content)["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return str(error)


async def _execute(request) -> ApiResponse:
    """Runs a googleapiclient request off the event loop and wraps the outcome."""
    try:
        result = await asyncio.to_thread(request.execute)
    except HttpError as e:
        return ApiResponse(
            error=ApiErrorBody(message=_error_message(e), code=e.resp.status)
        )
    return ApiResponse(result=result or {})


class DriveFiles:
    """Async facade over the `files` collection of a Drive v3 service."""

    def __init__(self, service):
        self._service = service

    async def list(
        self,
        page_token: Optional[str] = None,
        page_size: int = 1000,
        fields: Optional[str] = None,
        q: Optional[str] = None,
    ) -> ApiResponse:
        params = {"pageToken": page_token, "pageSize": page_size, "fields": fields, "q": q}
        request = self._service.files().list(
            **{key: value for key, value in params.items() if value is not None}
        )
        return await _execute(request)

    async def create(self, resource: Dict[str, Any], fields: Optional[str] = None) -> ApiResponse:
        if fields:
            request = self._service.files().create(body=resource, fields=fields)
        else:
            request = self._service.files().create(body=resource)
        return await _execute(request)

    async def get(self, file_id: str, fields: Optional[str] = None) -> ApiResponse:
        if fields:
            request = self._service.files().get(fileId=file_id, fields=fields)
        else:
            request = self._service.files().get(fileId=file_id)
        return await _execute(request)


class DriveClient:
    """
    Handle returned by a session provider. Issues structured API calls through
    `files` and yields the current token for raw HTTP requests.
    """

    def __init__(self, service, credentials: Credentials):
        self.files = DriveFiles(service)
        self._credentials = credentials

    def get_token(self) -> Token:
        return Token(access_token=self._credentials.token)


class SessionProvider(ABC):
    """Supplies a valid, possibly refreshed, Drive client on demand."""

    @abstractmethod
    async def login(self) -> DriveClient:
        pass


class GoogleSessionProvider(SessionProvider):
    """
    Session provider backed by an authorized-user token produced by a prior
    OAuth consent. Credentials are validated on every login and refreshed when
    they have expired.
    """

    def __init__(self, credentials_json: Optional[str], token_json: Optional[str]):
        if not token_json:
            raise ConfigurationError("GDRIVE_TOKEN_JSON is required to access Google Drive.")
        try:
            token_info = json.loads(token_json)
            # The credentials_json can come from a file or environment variable.
            # It should contain the client_id and client_secret.
            credentials_data = json.loads(credentials_json) if credentials_json else {}
        except ValueError as e:
            raise ConfigurationError(f"Invalid Google Drive credentials JSON: {e}") from e

        # Client secrets downloaded from the console nest under "installed" or "web"
        client_info = (
            credentials_data.get("installed")
            or credentials_data.get("web")
            or credentials_data
        )
        if "client_id" in client_info and "client_secret" in client_info:
            token_info = {
                **token_info,
                "client_id": client_info["client_id"],
                "client_secret": client_info["client_secret"],
            }
        else:
            logging.warning(
                "client_id or client_secret not found in GDRIVE_CREDENTIALS_JSON. Using existing from token_json if available."
            )

        try:
            self.credentials = Credentials.from_authorized_user_info(info=token_info)
        except ValueError as e:
            raise ConfigurationError(f"Failed to load Google Drive token: {e}") from e

        self._refresh_lock = asyncio.Lock()
        logging.info("Google Drive session provider initialized successfully.")

    async def login(self) -> DriveClient:
        async with self._refresh_lock:
            if not self.credentials.valid:
                if not self.credentials.refresh_token:
                    raise ConfigurationError(
                        "Google Drive credentials are invalid and cannot be refreshed."
                    )
                logging.info("Refreshing Google Drive access token...")
                try:
                    await asyncio.to_thread(self.credentials.refresh, Request())
                except RefreshError as e:
                    raise ConfigurationError(
                        f"Failed to refresh Google Drive access token: {e}"
                    ) from e

        # Loading the discovery document reads and parses a bundled JSON file
        service = await asyncio.to_thread(
            build, "drive", "v3", credentials=self.credentials, cache_discovery=False
        )
        return DriveClient(service, self.credentials)
