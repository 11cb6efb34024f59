from __future__ import annotations

import posixpath
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from diskette.Exceptions import FileNotFoundException, InvalidArgumentException, StorageException
from .Storage import Storage
from .StorageManager import get_storage_manager


# Storage Dependencies

def get_storage_disk(disk_name: str = "local") -> Storage:
    """Get a storage disk instance."""
    try:
        return get_storage_manager().disk(disk_name)
    except InvalidArgumentException as e:
        raise HTTPException(status_code=400, detail=str(e))


def get_default_storage() -> Storage:
    """Get the default storage disk."""
    return get_storage_manager().disk()


# Validation Dependencies

def validate_file_path(path: str) -> str:
    """Validate and normalise a relative file path."""
    normalized = posixpath.normpath(path.replace('\\', '/'))
    if (
        normalized.startswith('/')
        or normalized == '..'
        or normalized.startswith('../')
        or normalized == '.'
    ):
        raise HTTPException(status_code=400, detail="Invalid file path")
    return normalized


def validate_file_exists(
    path: str = Depends(validate_file_path),
    storage: Storage = Depends(get_default_storage)
) -> str:
    """Validate that a file exists."""
    if not storage.exists(path):
        raise HTTPException(status_code=404, detail="File not found")
    return path


# Exception handlers

async def file_not_found_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def storage_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"detail": "Storage error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Map storage exceptions to HTTP responses."""
    app.add_exception_handler(FileNotFoundException, file_not_found_handler)
    app.add_exception_handler(StorageException, storage_exception_handler)


# Type aliases for convenience
StorageDisk = Annotated[Storage, Depends(get_default_storage)]
ValidatedPath = Annotated[str, Depends(validate_file_path)]
ExistingFile = Annotated[str, Depends(validate_file_exists)]
