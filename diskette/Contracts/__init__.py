from __future__ import annotations

from .Storage.FilesystemInterface import FilesystemInterface
from .Storage.StorageInterface import StorageInterface
from .Storage.UriGeneratorInterface import UriGeneratorInterface

__all__: list[str] = [
    'FilesystemInterface',
    'StorageInterface',
    'UriGeneratorInterface',
]
