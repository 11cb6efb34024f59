from __future__ import annotations

from .StorageConfig import DiskConfig

__all__ = [
    'DiskConfig',
]
