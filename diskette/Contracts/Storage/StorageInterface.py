from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, Callable, Optional, Union


class StorageInterface(ABC):
    """Filename based storage operations over a filesystem backend."""

    @abstractmethod
    def resolve_real_path(self, filename: str) -> Optional[str]:
        """Resolve the actual location of a file."""
        pass

    @abstractmethod
    def exists(self, filename: str) -> bool:
        """Check if a file exists."""
        pass

    @abstractmethod
    def get_mime_type(self, filename: str) -> str:
        """Get the mime type of a file."""
        pass

    @abstractmethod
    def write(
        self,
        filename: str,
        contents: Union[str, bytes],
        on_success: Optional[Callable[[], object]] = None
    ) -> bool:
        """Create or replace a file from bytes."""
        pass

    @abstractmethod
    def write_from_stream(
        self,
        filename: str,
        stream: BinaryIO,
        on_success: Optional[Callable[[], object]] = None
    ) -> bool:
        """Create or replace a file from a stream."""
        pass

    @abstractmethod
    def read(self, filename: str) -> Union[bytes, bool]:
        """Read a file into memory."""
        pass

    @abstractmethod
    def read_to_stream(self, filename: str) -> BinaryIO:
        """Open a file for reading."""
        pass

    @abstractmethod
    def copy(self, source_filename: str, target_filename: str, force: bool = False) -> bool:
        """Copy a file, deleting an existing target first when forced."""
        pass

    @abstractmethod
    def delete(self, filename: str, delete_dirs: bool = False) -> bool:
        """Delete a file and optionally its now-empty parent directories."""
        pass

    @abstractmethod
    def delete_all(self, *filenames: str) -> bool:
        """Delete all files along with their empty directories."""
        pass
