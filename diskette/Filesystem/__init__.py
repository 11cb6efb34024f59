from __future__ import annotations

from .LocalFilesystemAdapter import LocalFilesystemAdapter
from .MemoryFilesystemAdapter import MemoryFilesystemAdapter

__all__ = [
    'LocalFilesystemAdapter',
    'MemoryFilesystemAdapter',
]
