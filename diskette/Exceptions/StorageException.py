from __future__ import annotations

from typing import Optional


class StorageException(Exception):
    """Base exception for storage operations."""
    pass


class FileNotFoundException(StorageException):
    """Raised when a guarded operation targets a missing file."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'File "{path}" does not exist')


class FilesystemException(StorageException):
    """Raised by filesystem adapters on I/O failures."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message)


class RollbackException(StorageException):
    """A write failed and the compensating delete failed as well."""

    def __init__(self, path: str, original: BaseException, rollback_error: BaseException) -> None:
        self.path = path
        self.original = original
        self.rollback_error = rollback_error
        super().__init__(
            f'Writing "{path}" failed ({original!r}) and rollback failed ({rollback_error!r})'
        )


class InvalidArgumentException(StorageException, ValueError):
    """Raised for unknown disks and invalid disk configuration."""
    pass
