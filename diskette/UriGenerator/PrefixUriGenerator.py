from __future__ import annotations

from typing import Optional

from diskette.Contracts.Storage.UriGeneratorInterface import UriGeneratorInterface
from diskette.Support.StoragePath import StoragePath


class PrefixUriGenerator(UriGeneratorInterface):
    """Places every filename under a fixed prefix, optionally with a URI scheme."""

    def __init__(self, prefix: str = '', scheme: Optional[str] = None) -> None:
        self.prefix = prefix
        self.scheme = scheme

    def generate(self, filename: str) -> str:
        """Generate ``[scheme://][prefix/]filename``."""
        return str(StoragePath(self.scheme).join(self.prefix, filename))
