from __future__ import annotations

from .Storage import Storage, ROLLBACK_RAISE, ROLLBACK_SUPPRESS
from .StorageManager import StorageManager, get_storage_manager, storage
from .Dependencies import (
    get_storage_disk, get_default_storage, validate_file_path, validate_file_exists,
    register_exception_handlers, StorageDisk, ValidatedPath, ExistingFile
)

__all__ = [
    # Storage facade
    "Storage",
    "ROLLBACK_RAISE",
    "ROLLBACK_SUPPRESS",

    # Disk management
    "StorageManager",
    "get_storage_manager",
    "storage",

    # Dependencies
    "get_storage_disk",
    "get_default_storage",
    "validate_file_path",
    "validate_file_exists",
    "register_exception_handlers",

    # Type annotations
    "StorageDisk",
    "ValidatedPath",
    "ExistingFile"
]
