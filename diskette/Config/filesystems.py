from __future__ import annotations

import os
from typing import Dict, Any

# Default filesystem disk
default = os.getenv('FILESYSTEM_DISK', 'local')

# Shared by the disks below; atomic_writes only affects the local driver
atomic_writes = os.getenv('FILESYSTEM_ATOMIC_WRITES', 'false').lower() in ('1', 'true', 'yes')
rollback_failure = os.getenv('FILESYSTEM_ROLLBACK_FAILURE', 'raise')

# Filesystem disks configuration
disks: Dict[str, Dict[str, Any]] = {
    'local': {
        'driver': 'local',
        'root': os.getenv('FILESYSTEM_ROOT', 'storage/app'),
        'atomic_writes': atomic_writes,
        'rollback_failure': rollback_failure,
    },

    'temp': {
        'driver': 'local',
        'root': os.getenv('FILESYSTEM_TEMP_ROOT', 'storage/app/temp'),
        'atomic_writes': atomic_writes,
        'rollback_failure': rollback_failure,
    },

    'memory': {
        'driver': 'memory',
        'scheme': 'memory',
        'rollback_failure': rollback_failure,
        'log_channel': 'null',
    },
}
