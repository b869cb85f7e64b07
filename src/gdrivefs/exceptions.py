# exceptions.py
from typing import Optional


class GDriveError(Exception):
    """Base class for every failure surfaced by the adapter. Never retried here."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidReferenceError(GDriveError):
    """The entry is not bound to a remote object (or is bound when it must not be)."""
    pass


class RemoteApiError(GDriveError):
    """A structured Drive API response carried an error."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class TransportError(GDriveError):
    """A raw media request came back with a non-success HTTP status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(GDriveError):
    """The configured credentials cannot be turned into a session."""
    pass
