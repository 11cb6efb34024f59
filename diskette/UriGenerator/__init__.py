from __future__ import annotations

from .PrefixUriGenerator import PrefixUriGenerator

__all__ = [
    'PrefixUriGenerator',
]
