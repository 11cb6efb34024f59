from __future__ import annotations

from .StorageException import (
    StorageException,
    FileNotFoundException,
    FilesystemException,
    RollbackException,
    InvalidArgumentException
)

__all__ = [
    'StorageException',
    'FileNotFoundException',
    'FilesystemException',
    'RollbackException',
    'InvalidArgumentException'
]
