from .exceptions import (
    ConfigurationError,
    GDriveError,
    InvalidReferenceError,
    RemoteApiError,
    TransportError,
)
from .gdrive import GoogleDriveAdapter
from .session import DriveClient, GoogleSessionProvider, SessionProvider, Token
from .storage.base import FileSystemAdapter
from .storage.dto import FileEntry, ReadResult

__all__ = [
    "ConfigurationError",
    "DriveClient",
    "FileEntry",
    "FileSystemAdapter",
    "GDriveError",
    "GoogleDriveAdapter",
    "GoogleSessionProvider",
    "InvalidReferenceError",
    "ReadResult",
    "RemoteApiError",
    "SessionProvider",
    "Token",
    "TransportError",
]
