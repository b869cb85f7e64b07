# storage/base.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional
from .dto import FileEntry, ReadResult


class FileSystemAdapter(ABC):
    """
    Abstract base class for a file-system adapter.
    Defines the fixed set of storage operations a host file system can
    delegate to a remote storage provider.
    """

    @abstractmethod
    async def readdir(
        self, entry: FileEntry, options: Optional[Mapping[str, Any]] = None
    ) -> List[FileEntry]:
        """
        Lists the children of a directory.

        :param entry: The container to list. An unbound entry means the root.
        :param options: Host options, opaque to the adapter.
        :return: A flat list of FileEntry DTOs.
        """
        pass

    @abstractmethod
    async def readfile(
        self, entry: FileEntry, options: Optional[Mapping[str, Any]] = None
    ) -> ReadResult:
        """
        Reads the content of a bound file.

        :param entry: The file to read. Must carry an `id`.
        :param options: Host options, opaque to the adapter.
        """
        pass

    @abstractmethod
    async def writefile(
        self,
        entry: FileEntry,
        binary: bytes,
        options: Optional[Mapping[str, Any]] = None,
    ) -> int:
        """
        Writes content to a file, creating it remotely first when unbound.

        :param entry: The file to write.
        :param binary: The raw payload.
        :param options: Host options, opaque to the adapter.
        :return: The size reported by the remote side, or 0.
        """
        pass

    @abstractmethod
    async def mkdir(
        self, entry: FileEntry, options: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Creates a directory.

        :param entry: The unbound directory entry to create.
        :param options: Host options, opaque to the adapter.
        """
        pass

    @abstractmethod
    async def url(
        self, entry: FileEntry, options: Optional[Mapping[str, Any]] = None
    ) -> Optional[str]:
        """
        Returns a public URL for a bound entry.

        :param entry: The entry to link to. Must carry an `id`.
        :param options: Host options, opaque to the adapter.
        """
        pass
