from __future__ import annotations

import logging
import mimetypes
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Any, BinaryIO, Callable, Dict, List, Optional, Union

from diskette.Contracts.Storage.FilesystemInterface import FilesystemInterface
from diskette.Exceptions import FilesystemException
from diskette.Support.StoragePath import StoragePath

DEFAULT_MIMETYPE = 'application/octet-stream'


class LocalFilesystemAdapter(FilesystemInterface):
    """
    Local disk filesystem rooted at a directory.

    Paths are relative to the root; a ``scheme://`` prefix is ignored. With
    ``atomic_writes`` enabled, files are written to a temporary sibling and
    moved into place with ``os.replace``.
    """

    def __init__(self, root: Union[str, Path] = 'storage/app', atomic_writes: bool = False) -> None:
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
        self.atomic_writes = atomic_writes
        self.logger = logging.getLogger(self.__class__.__name__)

    def _full_path(self, path: str) -> Path:
        """Get full filesystem path."""
        full_path = self.root.joinpath(*StoragePath.parse(path).segments)
        if full_path != self.root and self.root not in full_path.resolve().parents:
            raise FilesystemException(f"Path is outside of the root: {path}", path)
        return full_path

    def _relative(self, full_path: Path) -> str:
        return full_path.relative_to(self.root).as_posix()

    def has(self, path: str) -> bool:
        """Check if a file exists."""
        return self._full_path(path).is_file()

    def get_mimetype(self, path: str) -> str:
        """Guess the mime type from the file name."""
        mime_type, _ = mimetypes.guess_type(self._full_path(path).name)
        return mime_type or DEFAULT_MIMETYPE

    def put(self, path: str, contents: Union[str, bytes]) -> bool:
        """Create or replace a file."""
        if isinstance(contents, str):
            contents = contents.encode('utf-8')

        full_path = self._full_path(path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            if self.atomic_writes:
                self._write_atomic(full_path, lambda handle: handle.write(contents))
            else:
                full_path.write_bytes(contents)
        except OSError as e:
            raise FilesystemException(f"Unable to write file {path}: {e}", path) from e
        return True

    def put_stream(self, path: str, stream: BinaryIO) -> bool:
        """Create or replace a file from a readable stream."""
        full_path = self._full_path(path)
        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            if self.atomic_writes:
                self._write_atomic(full_path, lambda handle: shutil.copyfileobj(stream, handle))
            else:
                with open(full_path, 'wb') as handle:
                    shutil.copyfileobj(stream, handle)
        except OSError as e:
            raise FilesystemException(f"Unable to write file {path}: {e}", path) from e
        return True

    def _write_atomic(self, full_path: Path, writer: Callable[[BinaryIO], object]) -> None:
        """Write through a temporary file in the target directory, then replace."""
        fd, temp_name = tempfile.mkstemp(dir=full_path.parent, prefix=f".{full_path.name}.")
        try:
            with os.fdopen(fd, 'wb') as handle:
                writer(handle)
            # mkstemp creates 0600; keep the mode a plain write would give
            os.chmod(temp_name, self._file_mode(full_path))
            os.replace(temp_name, full_path)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise

    @staticmethod
    def _file_mode(full_path: Path) -> int:
        """Mode of the existing file, else the umask default for new files."""
        try:
            return stat.S_IMODE(full_path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    def read(self, path: str) -> Union[bytes, bool]:
        """Read a file, returning False when it cannot be read."""
        try:
            return self._full_path(path).read_bytes()
        except OSError as e:
            self.logger.error(f"Error reading file {path}: {e}")
            return False

    def read_stream(self, path: str) -> BinaryIO:
        """Open a file for reading."""
        try:
            return open(str(self._full_path(path)), 'rb')
        except OSError as e:
            raise FilesystemException(f"Unable to open file {path}: {e}", path) from e

    def copy(self, from_path: str, to_path: str) -> bool:
        """Copy a file."""
        from_full = self._full_path(from_path)
        to_full = self._full_path(to_path)
        try:
            to_full.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(from_full, to_full)
        except OSError as e:
            raise FilesystemException(f"Unable to copy {from_path} to {to_path}: {e}", from_path) from e
        return True

    def delete(self, path: str) -> bool:
        """Delete a file."""
        try:
            self._full_path(path).unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FilesystemException(f"Unable to delete file {path}: {e}", path) from e

    def list_contents(self, directory: str = '') -> List[Dict[str, Any]]:
        """List the direct children of a directory."""
        dir_path = self._full_path(directory)
        if not dir_path.is_dir():
            return []

        return [
            {
                'type': 'dir' if item.is_dir() else 'file',
                'path': self._relative(item),
            }
            for item in sorted(dir_path.iterdir())
        ]

    def delete_dir(self, directory: str) -> bool:
        """Delete a directory and everything in it."""
        dir_path = self._full_path(directory)
        if dir_path == self.root:
            raise FilesystemException("Refusing to delete the filesystem root", directory)

        try:
            shutil.rmtree(dir_path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise FilesystemException(f"Unable to delete directory {directory}: {e}", directory) from e

    def get_location(self, path: str) -> Optional[str]:
        """Get the absolute on-disk path."""
        return str(self._full_path(path))
