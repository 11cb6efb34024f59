from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

LOGGER_NAMESPACE = 'diskette'


def _parse_level(level: Union[str, int]) -> int:
    """Convert a config level such as 'debug' into a logging level."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


class LogChannel:
    """A named logger with its handlers and a context-aware API."""

    def __init__(self, name: str, handlers: List[logging.Handler], level: Union[str, int] = logging.INFO) -> None:
        self.name = name
        self.logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
        self.logger.setLevel(_parse_level(level))
        self.logger.handlers = list(handlers)
        self.logger.propagate = False

    def debug(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, context)

    def warning(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, context)

    def error(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.ERROR, message, context)

    def critical(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.CRITICAL, message, context)

    def log(self, level: Union[str, int], message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """Log message at specified level."""
        self._log(_parse_level(level), message, context)

    def _log(self, level: int, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        extra = {'context': context} if context else {}
        self.logger.log(level, message, extra=extra)


class LaravelFormatter(logging.Formatter):
    """Formats records as ``[timestamp] channel.LEVEL: message {context}``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')
        log_line = f"[{timestamp}] {record.name}.{record.levelname}: {record.getMessage()}"

        context = getattr(record, 'context', None)
        if context:
            log_line += f" {json.dumps(context, default=str)}"

        if record.exc_info:
            log_line += f"\n{self.formatException(record.exc_info)}"

        return log_line


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'channel': record.name,
            'message': record.getMessage(),
            'context': getattr(record, 'context', {}),
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class LogManager:
    """
    Builds log channels from configuration.

    The configuration mirrors ``diskette.Config.logging``: a ``default``
    channel name and a ``channels`` mapping whose entries pick a ``driver``
    (``stderr``, ``single``, ``stack`` or ``null``), a ``level`` and a
    ``formatter`` (``laravel`` or ``json``).
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        if config is None:
            from diskette.Config import logging as logging_config
            config = {'default': logging_config.default, 'channels': logging_config.channels}

        self._config = config
        self._channels: Dict[str, LogChannel] = {}
        self._default_channel = config.get('default', 'stderr')

    def channel(self, name: Optional[str] = None) -> LogChannel:
        """Get a log channel, creating it on first use."""
        name = name or self._default_channel

        if name not in self._channels:
            self._channels[name] = self._create_channel(name)

        return self._channels[name]

    def _create_channel(self, name: str) -> LogChannel:
        config = self._config.get('channels', {}).get(name)
        if config is None:
            raise ValueError(f"Log channel '{name}' is not configured")

        level = config.get('level', logging.INFO)
        return LogChannel(name, self._create_handlers(name, config), level)

    def _create_handlers(self, name: str, config: Dict[str, Any]) -> List[logging.Handler]:
        driver = config.get('driver', 'stderr')

        if driver == 'stack':
            handlers: List[logging.Handler] = []
            for channel_name in config.get('channels', []):
                handlers.extend(self.channel(channel_name).logger.handlers)
            return handlers

        if driver == 'null':
            return [logging.NullHandler()]

        if driver == 'single':
            path = Path(config.get('path', f'storage/logs/{name}.log'))
            path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(path)
        elif driver == 'stderr':
            handler = logging.StreamHandler(sys.stderr)
        else:
            raise ValueError(f"Log driver '{driver}' is not supported")

        handler.setFormatter(self._get_formatter(config))
        return [handler]

    def _get_formatter(self, config: Dict[str, Any]) -> logging.Formatter:
        if config.get('formatter', 'laravel') == 'json':
            return JsonFormatter()
        return LaravelFormatter()

    def get_default_driver(self) -> str:
        return self._default_channel

    def set_default_driver(self, name: str) -> None:
        self._default_channel = name

    def forget_channel(self, name: str) -> None:
        self._channels.pop(name, None)


log_manager_instance: Optional[LogManager] = None


def get_log_manager() -> LogManager:
    """Get the global log manager instance."""
    global log_manager_instance
    if log_manager_instance is None:
        log_manager_instance = LogManager()
    return log_manager_instance


def logger(channel: Optional[str] = None) -> LogChannel:
    """Get a log channel."""
    return get_log_manager().channel(channel)
