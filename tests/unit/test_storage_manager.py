"""Unit tests for the storage manager."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pytest

from diskette.Config import DiskConfig
from diskette.Contracts import FilesystemInterface
from diskette.Exceptions import InvalidArgumentException
from diskette.Filesystem import LocalFilesystemAdapter, MemoryFilesystemAdapter
from diskette.Log import LogManager
from diskette.Storage import Storage, StorageManager, ROLLBACK_SUPPRESS
from diskette.UriGenerator import PrefixUriGenerator


def make_config(tmp_path: Path) -> Dict[str, Any]:
    return {
        'default': 'memory',
        'disks': {
            'memory': {'driver': 'memory', 'scheme': 'memory', 'prefix': 'media'},
            'local': {'driver': 'local', 'root': str(tmp_path / 'app'), 'atomic_writes': True},
            'quiet': {'driver': 'memory', 'rollback_failure': 'suppress', 'log_channel': 'null'},
            'broken': {'driver': 'memory', 'rollback_failure': 'explode'},
            'ftp': {'driver': 'ftp', 'host': 'ftp.example.com'},
        },
    }


class TestStorageManager:
    """Building disks from configuration."""

    @pytest.fixture
    def manager(self, tmp_path: Path) -> StorageManager:
        log_manager = LogManager({'default': 'null', 'channels': {'null': {'driver': 'null'}}})
        return StorageManager(make_config(tmp_path), log_manager)

    def test_default_disk(self, manager: StorageManager) -> None:
        storage = manager.disk()

        assert storage is manager.disk('memory')
        assert isinstance(storage.filesystem, MemoryFilesystemAdapter)
        assert storage.uri_generator.generate('a.txt') == 'memory://media/a.txt'

    def test_disks_are_cached(self, manager: StorageManager) -> None:
        assert manager.disk('memory') is manager.disk('memory')

    def test_forget_rebuilds_disk(self, manager: StorageManager) -> None:
        first = manager.disk('memory')
        manager.forget('memory')

        assert manager.disk('memory') is not first

    def test_local_disk(self, manager: StorageManager, tmp_path: Path) -> None:
        storage = manager.disk('local')

        assert isinstance(storage.filesystem, LocalFilesystemAdapter)
        assert storage.filesystem.atomic_writes is True
        storage.write('a.txt', b'x')
        assert (tmp_path / 'app' / 'a.txt').read_bytes() == b'x'

    def test_rollback_policy_and_log_channel(self, manager: StorageManager) -> None:
        storage = manager.disk('quiet')

        assert storage.rollback_failure == ROLLBACK_SUPPRESS
        assert storage.logger.name == 'diskette.null'

    def test_default_logger_without_channel(self, manager: StorageManager) -> None:
        assert manager.disk('memory').logger.name == 'Storage'

    def test_unknown_disk(self, manager: StorageManager) -> None:
        with pytest.raises(InvalidArgumentException, match="Disk 'missing' is not configured"):
            manager.disk('missing')

    def test_invalid_configuration(self, manager: StorageManager) -> None:
        with pytest.raises(InvalidArgumentException, match="Invalid configuration for disk 'broken'"):
            manager.disk('broken')

    def test_unsupported_driver(self, manager: StorageManager) -> None:
        with pytest.raises(InvalidArgumentException, match="driver 'ftp' is not supported"):
            manager.disk('ftp')

    def test_custom_driver(self, manager: StorageManager) -> None:
        received: List[DiskConfig] = []

        def factory(config: DiskConfig) -> FilesystemInterface:
            received.append(config)
            return MemoryFilesystemAdapter()

        manager.extend('ftp', factory)
        storage = manager.disk('ftp')

        assert isinstance(storage.filesystem, MemoryFilesystemAdapter)
        assert received[0].driver == 'ftp'
        assert getattr(received[0], 'host') == 'ftp.example.com'

    def test_set_installs_prebuilt_storage(self, manager: StorageManager) -> None:
        storage = Storage(MemoryFilesystemAdapter(), PrefixUriGenerator())
        manager.set('custom', storage)

        assert manager.disk('custom') is storage

    def test_default_driver_can_change(self, manager: StorageManager) -> None:
        manager.set_default_driver('quiet')

        assert manager.get_default_driver() == 'quiet'
        assert manager.disk() is manager.disk('quiet')

    def test_bundled_configuration(self) -> None:
        manager = StorageManager(log_manager=LogManager({'channels': {'null': {'driver': 'null'}}}))
        storage = manager.disk('memory')

        storage.write('a.txt', b'x')
        assert storage.uri_generator.generate('a.txt') == 'memory://a.txt'
        assert storage.read('a.txt') == b'x'

    def test_bundled_disks_share_write_settings(self) -> None:
        from diskette.Config import filesystems

        for disk in filesystems.disks.values():
            assert disk['rollback_failure'] == filesystems.rollback_failure
            if disk['driver'] == 'local':
                assert disk['atomic_writes'] == filesystems.atomic_writes


class TestDiskConfig:
    """Validation of disk configuration."""

    def test_defaults(self) -> None:
        config = DiskConfig()

        assert config.driver == 'local'
        assert config.prefix == ''
        assert config.scheme is None
        assert config.atomic_writes is False
        assert config.rollback_failure == 'raise'

    def test_extra_keys_are_kept(self) -> None:
        config = DiskConfig.model_validate({'driver': 'sftp', 'port': 22})
        assert config.model_dump()['port'] == 22
