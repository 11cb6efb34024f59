from __future__ import annotations

import io
import mimetypes
from typing import Any, BinaryIO, Dict, List, Optional, Set, Union

from diskette.Contracts.Storage.FilesystemInterface import FilesystemInterface
from diskette.Exceptions import FilesystemException
from diskette.Support.StoragePath import StoragePath

DEFAULT_MIMETYPE = 'application/octet-stream'


class MemoryFilesystemAdapter(FilesystemInterface):
    """
    In-memory filesystem for testing.

    Directories are tracked explicitly: writing a file creates every ancestor
    directory and deleting the file leaves them in place, like a real disk.
    Paths may carry a ``scheme://`` prefix; all keys are stored without it.
    """

    def __init__(self, scheme: Optional[str] = None) -> None:
        self.scheme = scheme
        self._files: Dict[str, bytes] = {}
        self._directories: Set[str] = set()

    def _normalize_path(self, path: str) -> StoragePath:
        """Parse a path and check its scheme."""
        parsed = StoragePath.parse(path)
        if self.scheme is not None and parsed.scheme not in (None, self.scheme):
            raise FilesystemException(f"Unsupported scheme '{parsed.scheme}' for path {path}", path)
        return StoragePath(None, parsed.segments)

    def has(self, path: str) -> bool:
        """Check if a file exists."""
        return self._normalize_path(path).key in self._files

    def get_mimetype(self, path: str) -> str:
        """Guess the mime type from the file name."""
        mime_type, _ = mimetypes.guess_type(self._normalize_path(path).name)
        return mime_type or DEFAULT_MIMETYPE

    def put(self, path: str, contents: Union[str, bytes]) -> bool:
        """Store a file."""
        if isinstance(contents, str):
            contents = contents.encode('utf-8')

        normalized = self._normalize_path(path)
        if normalized.is_root:
            raise FilesystemException("Cannot write to the filesystem root", path)
        if normalized.key in self._directories:
            raise FilesystemException(f"Path is a directory: {path}", path)
        for ancestor in normalized.parent.ancestors():
            if ancestor.key in self._files:
                raise FilesystemException(f"Parent {ancestor.key} is a file: {path}", path)

        self._files[normalized.key] = bytes(contents)
        for ancestor in normalized.parent.ancestors():
            self._directories.add(ancestor.key)
        return True

    def put_stream(self, path: str, stream: BinaryIO) -> bool:
        """Store a file from a readable stream."""
        return self.put(path, stream.read())

    def read(self, path: str) -> Union[bytes, bool]:
        """Get file contents, or False when the file is missing."""
        return self._files.get(self._normalize_path(path).key, False)

    def read_stream(self, path: str) -> BinaryIO:
        """Open a file for reading."""
        key = self._normalize_path(path).key
        if key not in self._files:
            raise FilesystemException(f"File not found: {path}", path)
        return io.BytesIO(self._files[key])

    def copy(self, from_path: str, to_path: str) -> bool:
        """Copy a file."""
        key = self._normalize_path(from_path).key
        if key not in self._files:
            return False
        return self.put(to_path, self._files[key])

    def delete(self, path: str) -> bool:
        """Delete a file."""
        return self._files.pop(self._normalize_path(path).key, None) is not None

    def list_contents(self, directory: str = '') -> List[Dict[str, Any]]:
        """List the direct children of a directory."""
        normalized = self._normalize_path(directory)
        depth = len(normalized.segments)

        def is_child(key: str) -> bool:
            segments = tuple(key.split('/'))
            return len(segments) == depth + 1 and segments[:depth] == normalized.segments

        entries = [{'type': 'dir', 'path': key} for key in self._directories if is_child(key)]
        entries += [{'type': 'file', 'path': key} for key in self._files if is_child(key)]
        return sorted(entries, key=lambda entry: entry['path'])

    def make_directory(self, directory: str) -> bool:
        """Create a directory and its ancestors."""
        for ancestor in self._normalize_path(directory).ancestors():
            self._directories.add(ancestor.key)
        return True

    def delete_dir(self, directory: str) -> bool:
        """Delete a directory and everything below it."""
        normalized = self._normalize_path(directory)
        if normalized.is_root:
            raise FilesystemException("Refusing to delete the filesystem root", directory)
        if normalized.key not in self._directories:
            return False

        prefix = normalized.key + '/'
        self._directories = {
            key for key in self._directories
            if key != normalized.key and not key.startswith(prefix)
        }
        self._files = {
            key: value for key, value in self._files.items()
            if not key.startswith(prefix)
        }
        return True

    def directories(self) -> List[str]:
        """All known directories."""
        return sorted(self._directories)
