from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from diskette.Config.StorageConfig import DiskConfig
from diskette.Contracts.Storage.FilesystemInterface import FilesystemInterface
from diskette.Filesystem.LocalFilesystemAdapter import LocalFilesystemAdapter
from diskette.Filesystem.MemoryFilesystemAdapter import MemoryFilesystemAdapter
from diskette.Log.LogManager import LogManager, get_log_manager
from diskette.UriGenerator.PrefixUriGenerator import PrefixUriGenerator
from diskette.Exceptions import InvalidArgumentException
from .Storage import Storage

DriverFactory = Callable[[DiskConfig], FilesystemInterface]


class StorageManager:
    """Laravel-style manager building named storage disks from configuration."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        log_manager: Optional[LogManager] = None
    ) -> None:
        if config is None:
            from diskette.Config import filesystems
            config = {'default': filesystems.default, 'disks': filesystems.disks}

        self._config = config
        self._log_manager = log_manager
        self._disks: Dict[str, Storage] = {}
        self._custom_drivers: Dict[str, DriverFactory] = {}
        self._default_disk = config.get('default', 'local')
        self.logger = logging.getLogger(self.__class__.__name__)

    def disk(self, name: Optional[str] = None) -> Storage:
        """Get a storage disk."""
        name = name or self._default_disk

        if name not in self._disks:
            self._disks[name] = self._resolve(name)

        return self._disks[name]

    def _resolve(self, name: str) -> Storage:
        raw = self._config.get('disks', {}).get(name)
        if raw is None:
            raise InvalidArgumentException(f"Disk '{name}' is not configured")

        try:
            config = DiskConfig.model_validate(raw)
        except ValidationError as e:
            raise InvalidArgumentException(f"Invalid configuration for disk '{name}': {e}") from e

        self.logger.debug(f"Creating disk '{name}' with driver '{config.driver}'")
        return Storage(
            self._create_filesystem(config),
            PrefixUriGenerator(config.prefix, config.scheme),
            logger=self._get_logger(config),
            rollback_failure=config.rollback_failure
        )

    def _create_filesystem(self, config: DiskConfig) -> FilesystemInterface:
        if config.driver in self._custom_drivers:
            return self._custom_drivers[config.driver](config)
        if config.driver == 'local':
            return LocalFilesystemAdapter(config.root, atomic_writes=config.atomic_writes)
        if config.driver == 'memory':
            return MemoryFilesystemAdapter(config.scheme)

        raise InvalidArgumentException(f"Filesystem driver '{config.driver}' is not supported")

    def _get_logger(self, config: DiskConfig) -> Optional[logging.Logger]:
        if config.log_channel is None:
            return None
        log_manager = self._log_manager or get_log_manager()
        return log_manager.channel(config.log_channel).logger

    def extend(self, driver: str, factory: DriverFactory) -> None:
        """Register a custom filesystem driver."""
        self._custom_drivers[driver] = factory

    def set(self, name: str, storage: Storage) -> None:
        """Install a prebuilt storage instance as a disk."""
        self._disks[name] = storage

    def forget(self, name: str) -> None:
        """Drop a cached disk so it is rebuilt on next use."""
        self._disks.pop(name, None)

    def get_default_driver(self) -> str:
        return self._default_disk

    def set_default_driver(self, name: str) -> None:
        self._default_disk = name


storage_manager_instance: Optional[StorageManager] = None


def get_storage_manager() -> StorageManager:
    """Get the global storage manager instance."""
    global storage_manager_instance
    if storage_manager_instance is None:
        storage_manager_instance = StorageManager()
    return storage_manager_instance


def storage(disk: Optional[str] = None) -> Storage:
    """Get a storage disk from the global manager."""
    return get_storage_manager().disk(disk)
