# responses.py
"""
Normalizes the three response shapes the Drive adapter deals with
(structured API responses, raw media responses and local preconditions)
into a single failure model: a GDriveError subclass carrying a message.
"""
from typing import Any, Dict

import httpx

from .exceptions import InvalidReferenceError, RemoteApiError, TransportError
from .session import ApiResponse
from .storage.dto import DEFAULT_MIME_TYPE, FileEntry, ReadResult


def _describe(entry: FileEntry) -> str:
    return entry.path or entry.filename or "<unnamed>"


def check_entry(entry: FileEntry) -> FileEntry:
    """Raises InvalidReferenceError unless the entry is bound to a remote object."""
    if not entry.bound:
        raise InvalidReferenceError(f"Invalid gdrive file '{_describe(entry)}': no id")
    return entry


def check_unbound(entry: FileEntry) -> FileEntry:
    """Raises InvalidReferenceError if the entry already exists remotely."""
    if entry.bound:
        raise InvalidReferenceError(
            f"Invalid gdrive file '{_describe(entry)}': already exists with id '{entry.id}'"
        )
    return entry


def check_response(response: ApiResponse) -> Dict[str, Any]:
    """Returns the result payload of a structured response or raises RemoteApiError."""
    if response.error is not None:
        raise RemoteApiError(response.error.message, code=response.error.code)
    return response.result


def _transport_error(response: httpx.Response) -> TransportError:
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        # Non-JSON error bodies (proxies, gateways)
        message = f"HTTP {response.status_code} {response.reason_phrase}".strip()
    return TransportError(message, status_code=response.status_code)


def check_download_response(response: httpx.Response, entry: FileEntry) -> ReadResult:
    if not response.is_success:
        raise _transport_error(response)
    return ReadResult(body=response.content, mime=entry.mime or DEFAULT_MIME_TYPE)


def check_upload_response(response: httpx.Response) -> Dict[str, Any]:
    if not response.is_success:
        raise _transport_error(response)
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        raise TransportError(
            f"Unexpected upload response body (HTTP {response.status_code})",
            status_code=response.status_code,
        )
    error = payload.get("error")
    if error:
        raise RemoteApiError(error.get("message", "Unknown error"), code=error.get("code"))
    return payload
