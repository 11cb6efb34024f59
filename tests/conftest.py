"""Shared fixtures for storage tests."""

from __future__ import annotations

import pytest

from diskette.Filesystem import MemoryFilesystemAdapter
from diskette.Storage import Storage
from diskette.UriGenerator import PrefixUriGenerator


@pytest.fixture
def filesystem() -> MemoryFilesystemAdapter:
    """Empty in-memory filesystem."""
    return MemoryFilesystemAdapter()


@pytest.fixture
def storage(filesystem: MemoryFilesystemAdapter) -> Storage:
    """Storage facade over the in-memory filesystem."""
    return Storage(filesystem, PrefixUriGenerator())
