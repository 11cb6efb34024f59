from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, List, Optional, Union


class FilesystemInterface(ABC):
    """
    Filesystem backend contract consumed by the storage facade.

    Implementations own the actual byte storage. Paths are whatever the
    configured URI generator produces, optionally ``scheme://`` prefixed.
    """

    @abstractmethod
    def has(self, path: str) -> bool:
        """Check if a file exists."""
        pass

    @abstractmethod
    def get_mimetype(self, path: str) -> str:
        """Get the mime type of a file."""
        pass

    @abstractmethod
    def put(self, path: str, contents: Union[str, bytes]) -> bool:
        """Create or replace a file."""
        pass

    @abstractmethod
    def put_stream(self, path: str, stream: BinaryIO) -> bool:
        """Create or replace a file from a readable stream."""
        pass

    @abstractmethod
    def read(self, path: str) -> Union[bytes, bool]:
        """Read a file into memory."""
        pass

    @abstractmethod
    def read_stream(self, path: str) -> BinaryIO:
        """Open a file for reading."""
        pass

    @abstractmethod
    def copy(self, from_path: str, to_path: str) -> bool:
        """Copy a file."""
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """Delete a file."""
        pass

    @abstractmethod
    def list_contents(self, directory: str = '') -> List[Dict[str, Any]]:
        """List the direct children of a directory."""
        pass

    @abstractmethod
    def delete_dir(self, directory: str) -> bool:
        """Delete a directory and everything in it."""
        pass

    def get_location(self, path: str) -> Optional[str]:
        """
        Get the real location backing a path.

        The default opens a read stream and reports its ``name`` when the
        stream is file-backed. The stream is closed before returning.
        """
        with self.read_stream(path) as stream:
            location = getattr(stream, 'name', None)
        return location if isinstance(location, str) else None
