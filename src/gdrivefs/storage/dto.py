# storage/dto.py
from pydantic import BaseModel, Field, model_validator
from typing import Any, Dict, Optional


class FileEntry(BaseModel):
    """
    A standardized Data Transfer Object describing a file or folder in the
    abstract file-system namespace. `id` is the only handle the remote side
    understands; `path` is purely logical.
    """

    is_file: bool = False
    is_directory: bool = False
    mime: Optional[str] = None
    size: Optional[int] = None
    path: Optional[str] = None
    filename: Optional[str] = None
    id: Optional[str] = None
    parent_id: Optional[str] = None
    stat: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def check_kind(self):
        if self.is_file and self.is_directory:
            raise ValueError("An entry cannot be both a file and a directory")
        if self.is_directory and (self.mime is not None or self.size is not None):
            raise ValueError("A directory entry cannot carry mime or size")
        return self

    @property
    def bound(self) -> bool:
        return bool(self.id)


class ReadResult(BaseModel):
    """Binary payload of a downloaded file plus the mime type it resolved to."""

    body: bytes
    mime: str


DEFAULT_MIME_TYPE = "application/octet-stream"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
