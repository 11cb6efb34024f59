from __future__ import annotations

import os
from typing import Dict, Any

# Default log channel
default = os.getenv('LOG_CHANNEL', 'stderr')

channels: Dict[str, Dict[str, Any]] = {
    'stack': {
        'driver': 'stack',
        'channels': ['stderr', 'single'],
        'level': os.getenv('LOG_LEVEL', 'debug'),
    },

    'stderr': {
        'driver': 'stderr',
        'level': os.getenv('LOG_LEVEL', 'warning'),
        'formatter': 'laravel',
    },

    'single': {
        'driver': 'single',
        'path': os.getenv('LOG_PATH', 'storage/logs/diskette.log'),
        'level': os.getenv('LOG_LEVEL', 'debug'),
    },

    'json': {
        'driver': 'stderr',
        'level': os.getenv('LOG_LEVEL', 'debug'),
        'formatter': 'json',
    },

    'null': {
        'driver': 'null',
    },
}
