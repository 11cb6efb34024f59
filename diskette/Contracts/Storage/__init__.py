from __future__ import annotations

from .FilesystemInterface import FilesystemInterface
from .StorageInterface import StorageInterface
from .UriGeneratorInterface import UriGeneratorInterface

__all__: list[str] = [
    'FilesystemInterface',
    'StorageInterface',
    'UriGeneratorInterface',
]
