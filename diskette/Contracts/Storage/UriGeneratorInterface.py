from __future__ import annotations

from abc import ABC, abstractmethod


class UriGeneratorInterface(ABC):
    """Maps a logical filename to a backend path or URI."""

    @abstractmethod
    def generate(self, filename: str) -> str:
        """Generate the backend path for a filename."""
        pass
