from __future__ import annotations

from .StoragePath import StoragePath

__all__ = [
    'StoragePath',
]
