from __future__ import annotations

import logging
from typing import Any, BinaryIO, Callable, Optional, TypeVar, Union

from diskette.Contracts.Storage.FilesystemInterface import FilesystemInterface
from diskette.Contracts.Storage.StorageInterface import StorageInterface
from diskette.Contracts.Storage.UriGeneratorInterface import UriGeneratorInterface
from diskette.Exceptions import FileNotFoundException, InvalidArgumentException, RollbackException
from diskette.Support.StoragePath import StoragePath

T = TypeVar('T')

ROLLBACK_RAISE = 'raise'
ROLLBACK_SUPPRESS = 'suppress'


class Storage(StorageInterface):
    """
    Filename based facade over a filesystem backend.

    Every call resolves the filename through the URI generator and delegates
    to the filesystem. Reads are guarded by an existence check, writes are
    rolled back when the backend or the ``on_success`` callback raises, and
    deletes can remove parent directories left empty.
    """

    def __init__(
        self,
        filesystem: FilesystemInterface,
        uri_generator: UriGeneratorInterface,
        logger: Optional[logging.Logger] = None,
        rollback_failure: str = ROLLBACK_RAISE
    ) -> None:
        if rollback_failure not in (ROLLBACK_RAISE, ROLLBACK_SUPPRESS):
            raise InvalidArgumentException(f"Unknown rollback failure policy '{rollback_failure}'")

        self.filesystem = filesystem
        self.uri_generator = uri_generator
        self.rollback_failure = rollback_failure
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def resolve_real_path(self, filename: str) -> Optional[str]:
        """Resolve the actual location of a file."""
        path = self._ensure_exists(filename)
        return self.filesystem.get_location(path)

    def exists(self, filename: str) -> bool:
        """Check if a file exists."""
        return self.filesystem.has(self._get_path(filename))

    def missing(self, filename: str) -> bool:
        """Check if a file is missing."""
        return not self.exists(filename)

    def get_mime_type(self, filename: str) -> str:
        """Get the mime type of a file."""
        path = self._ensure_exists(filename)
        return self.filesystem.get_mimetype(path)

    def write(
        self,
        filename: str,
        contents: Union[str, bytes],
        on_success: Optional[Callable[[], object]] = None
    ) -> bool:
        """Create or replace a file from bytes."""
        path = self._get_path(filename)
        self.logger.debug(f"Writing {path}")

        return self._transactional(
            path,
            lambda: self.filesystem.put(path, contents),
            on_success
        )

    def write_from_stream(
        self,
        filename: str,
        stream: BinaryIO,
        on_success: Optional[Callable[[], object]] = None
    ) -> bool:
        """Create or replace a file from a stream."""
        path = self._get_path(filename)
        self.logger.debug(f"Writing {path} from stream")

        return self._transactional(
            path,
            lambda: self.filesystem.put_stream(path, stream),
            on_success
        )

    def read(self, filename: str) -> Union[bytes, bool]:
        """Read a file into memory."""
        path = self._ensure_exists(filename)
        return self.filesystem.read(path)

    def read_to_stream(self, filename: str) -> BinaryIO:
        """Open a file for reading. The caller closes the stream."""
        path = self._ensure_exists(filename)
        return self.filesystem.read_stream(path)

    def copy(self, source_filename: str, target_filename: str, force: bool = False) -> bool:
        """Copy a file, deleting an existing target first when forced."""
        source = self._ensure_exists(source_filename)

        if force and self.exists(target_filename):
            self.delete(target_filename)

        target = self._get_path(target_filename)
        self.logger.debug(f"Copying {source} to {target}")
        return self.filesystem.copy(source, target)

    def delete(self, filename: str, delete_dirs: bool = False) -> bool:
        """Delete a file and optionally its now-empty parent directories."""
        if not self.exists(filename):
            return False

        path = self._get_path(filename)
        deleted = self.filesystem.delete(path)
        self.logger.debug(f"Deleted {path}" if deleted else f"Could not delete {path}")

        if deleted and delete_dirs:
            self._delete_empty_dirs(StoragePath.parse(path).parent)

        return deleted

    def delete_all(self, *filenames: str) -> bool:
        """Delete all files along with their empty directories."""
        left = len(filenames)

        for filename in filenames:
            self.delete(filename, True)
            if not self.exists(filename):
                left -= 1

        return left == 0

    def _delete_empty_dirs(self, directory: StoragePath) -> None:
        """Remove empty directories walking upwards, stopping at the first non-empty one."""
        for current in directory.ancestors():
            path = str(current)
            if self.filesystem.list_contents(path):
                break

            self.filesystem.delete_dir(path)
            self.logger.debug(f"Removed empty directory {path}")

    def _ensure_exists(self, filename: str) -> str:
        """Get the path of a file, raising if it does not exist."""
        path = self._get_path(filename)
        if not self.filesystem.has(path):
            raise FileNotFoundException(path)
        return path

    def _get_path(self, filename: str) -> str:
        return self.uri_generator.generate(filename)

    def _transactional(
        self,
        path: str,
        operation: Callable[[], T],
        on_success: Optional[Callable[[], Any]]
    ) -> T:
        """Run a write and its callback, deleting the path if either raises."""
        try:
            result = operation()
            if on_success is not None:
                on_success()
            return result
        except Exception as e:
            self.logger.warning(f"Write to {path} failed, rolling back: {e}")
            try:
                self.filesystem.delete(path)
            except Exception as rollback_error:
                self.logger.error(f"Rollback of {path} failed: {rollback_error}")
                if self.rollback_failure == ROLLBACK_RAISE:
                    raise RollbackException(path, e, rollback_error) from e
            raise
