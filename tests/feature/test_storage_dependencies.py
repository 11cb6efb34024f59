"""Feature tests for the FastAPI storage dependencies."""

from __future__ import annotations

import importlib
from typing import Iterator

import pytest
from fastapi import Depends, FastAPI, Response
from fastapi.testclient import TestClient

from diskette.Exceptions import StorageException
from diskette.Filesystem import MemoryFilesystemAdapter
from diskette.Storage import (
    ExistingFile,
    Storage,
    StorageDisk,
    StorageManager,
    ValidatedPath,
    get_default_storage,
    get_storage_disk,
    register_exception_handlers,
)
from diskette.UriGenerator import PrefixUriGenerator

storage_manager_module = importlib.import_module('diskette.Storage.StorageManager')


def create_test_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/files/{path:path}")
    def show_file(filename: ExistingFile, storage: StorageDisk) -> Response:
        return Response(content=storage.read(filename), media_type=storage.get_mime_type(filename))

    @app.get("/raw/{name}")
    def raw_file(name: str, storage: StorageDisk) -> Response:
        return Response(content=storage.read(name))

    @app.get("/validate")
    def validate(normalized: ValidatedPath) -> dict:
        return {"path": normalized}

    @app.get("/disks/{disk_name}/exists")
    def exists(name: str, storage: Storage = Depends(get_storage_disk)) -> dict:
        return {"exists": storage.exists(name)}

    @app.get("/broken")
    def broken() -> dict:
        raise StorageException("backend unavailable")

    return app


class TestStorageDependencies:
    """Storage dependencies wired into a FastAPI app."""

    @pytest.fixture
    def storage(self) -> Storage:
        storage = Storage(MemoryFilesystemAdapter(), PrefixUriGenerator())
        storage.write('docs/report.txt', b'hello')
        return storage

    @pytest.fixture
    def client(self, storage: Storage, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
        """Create test client with an in-memory default disk."""
        manager = StorageManager({'default': 'memory', 'disks': {'memory': {'driver': 'memory'}}})
        manager.set('memory', storage)
        monkeypatch.setattr(storage_manager_module, 'storage_manager_instance', manager)

        app = create_test_app()
        with TestClient(app) as client:
            yield client

    def test_existing_file_is_served(self, client: TestClient) -> None:
        response = client.get("/files/docs/report.txt")

        assert response.status_code == 200
        assert response.content == b'hello'
        assert response.headers['content-type'].startswith('text/plain')

    def test_missing_file_is_404(self, client: TestClient) -> None:
        response = client.get("/files/docs/missing.txt")

        assert response.status_code == 404
        assert response.json() == {"detail": "File not found"}

    def test_file_not_found_exception_maps_to_404(self, client: TestClient) -> None:
        response = client.get("/raw/missing.txt")

        assert response.status_code == 404
        assert response.json() == {"detail": 'File "missing.txt" does not exist'}

    def test_storage_exception_maps_to_500(self, client: TestClient) -> None:
        response = client.get("/broken")

        assert response.status_code == 500
        assert response.json() == {"detail": "Storage error"}

    @pytest.mark.parametrize('path, expected', [
        ('docs/report.txt', 'docs/report.txt'),
        ('docs/./a/../report.txt', 'docs/report.txt'),
        ('docs\\report.txt', 'docs/report.txt'),
    ])
    def test_valid_paths_are_normalised(self, client: TestClient, path: str, expected: str) -> None:
        response = client.get("/validate", params={"path": path})

        assert response.status_code == 200
        assert response.json() == {"path": expected}

    @pytest.mark.parametrize('path', ['../secret.txt', '/etc/passwd', 'docs/../../secret', '.'])
    def test_invalid_paths_are_rejected(self, client: TestClient, path: str) -> None:
        response = client.get("/validate", params={"path": path})

        assert response.status_code == 400

    def test_named_disk(self, client: TestClient) -> None:
        response = client.get("/disks/memory/exists", params={"name": "docs/report.txt"})

        assert response.status_code == 200
        assert response.json() == {"exists": True}

    def test_unknown_disk_is_400(self, client: TestClient) -> None:
        response = client.get("/disks/missing/exists", params={"name": "a.txt"})

        assert response.status_code == 400

    def test_default_storage_can_be_overridden(self) -> None:
        app = create_test_app()
        other = Storage(MemoryFilesystemAdapter(), PrefixUriGenerator())
        other.write('docs/report.txt', b'override')
        app.dependency_overrides[get_default_storage] = lambda: other

        with TestClient(app) as client:
            response = client.get("/files/docs/report.txt")

        assert response.content == b'override'
