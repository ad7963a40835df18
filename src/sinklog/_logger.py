"""Logger instances and the process-wide default logger."""
from __future__ import annotations

import datetime
import os
import threading
import weakref
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from sinklog import config as config_log
from sinklog._backend import get_backend
from sinklog._format import CallerDepth, Level, LineFormat, compose_message
from sinklog.sinks import FileSink, URLSink

__all__ = [
    'Logger',
    'LoggerConfig',
    'get_default_logger',
    'set_default_logger',
]


def _derive_file_path(app_name: str) -> str:
    """Path of today's log file for an application."""
    return os.path.join(config_log.logs_dir, f'{app_name}-{datetime.date.today():%Y-%m-%d}.log')


@dataclass(frozen=True)
class LoggerConfig:
    """Immutable logger configuration.

    An empty app_name falls back to the configured default ('LOGS').
    file_path is derived once, when the config is built, from the logs
    directory, the app name and the current date. A process running past
    midnight keeps writing to the file named for the day the config was
    built.
    """
    app_name: str = ''
    webhook_url: str = ''
    file_logging: bool = False
    show_date: bool = True
    show_time: bool = True
    file_path: str = field(init=False, default='')

    def __post_init__(self):
        if not self.app_name:
            object.__setattr__(self, 'app_name', config_log.default_app)
        if self.file_logging:
            object.__setattr__(self, 'file_path', _derive_file_path(self.app_name))


class Logger:
    """Formats log lines and writes them to the configured sinks.

    Records go through loguru, bound to this logger's key and app name; the
    sinks are loguru handlers that only accept this logger's records. They
    run in a fixed order, webhook first and file second, and each one deals
    with its own failures. With neither configured, a log call is dropped.
    The handlers are removed when the Logger is garbage collected.

    Examples
        >>> log = Logger(app_name='myapp', file_logging=True)  # doctest: +SKIP
        >>> log.warning('Disk almost full', '/var', '93%')  # doctest: +SKIP
    """

    def __init__(self, config: LoggerConfig | None = None, **fields):
        if config is None:
            config = LoggerConfig(**fields)
        elif fields:
            raise TypeError('Pass either a LoggerConfig or config fields, not both')
        self._config = config

        backend = get_backend()
        self._key = backend.new_key()
        self._bound = backend.bind(self._key, app=config.app_name)
        self._format = LineFormat(config.show_date, config.show_time)
        self._sinks = []
        self._sink_ids: list[int] = []
        if config.webhook_url:
            self._add_sink(URLSink(config.webhook_url))
        if config.file_logging:
            self._add_sink(FileSink(config.file_path))
        weakref.finalize(self, backend.remove_sinks, self._sink_ids)

    def _add_sink(self, sink: Callable[[Any], None]) -> None:
        """Attach a sink receiving this logger's formatted lines."""
        self._sink_ids.append(get_backend().add_sink(sink, self._key, self._format))
        self._sinks.append(sink)

    def __repr__(self) -> str:
        return f'Logger({self._config!r})'

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def app_name(self) -> str:
        return self._config.app_name

    @property
    def webhook_url(self) -> str:
        return self._config.webhook_url

    @property
    def file_logging(self) -> bool:
        return self._config.file_logging

    @property
    def file_path(self) -> str:
        return self._config.file_path

    def trace(self, message: str, *extra: str) -> None:
        self._log(Level.TRACE, message, extra)

    def debug(self, message: str, *extra: str) -> None:
        self._log(Level.DEBUG, message, extra)

    def info(self, message: str, *extra: str) -> None:
        self._log(Level.INFO, message, extra)

    def notice(self, message: str, *extra: str) -> None:
        self._log(Level.NOTICE, message, extra)

    def warning(self, message: str, *extra: str) -> None:
        self._log(Level.WARNING, message, extra)

    def error(self, message: str, *extra: str) -> None:
        self._log(Level.ERROR, message, extra)

    def fatal(self, message: str, *extra: str) -> None:
        """Log at FATAL. This is a severity label only, the process keeps running."""
        self._log(Level.FATAL, message, extra)

    def log(self, level: Level | str, message: str, *extra: str) -> None:
        """Log at the given level.

        Raises
            ValueError: level is not one of the Level labels
        """
        self._log(level, message, extra)

    def _log(self, level: Level | str, message: str, extra: tuple[str, ...] = (),
             depth: CallerDepth = CallerDepth.DIRECT) -> None:
        level = Level(level)
        if not self._sink_ids:
            return
        depth = CallerDepth.resolve(depth)
        get_backend().log(
            self._bound,
            level.value,
            compose_message(message, extra, depth),
            depth=2 + depth,  # _log <- level method <- caller
        )


# Fixed app name of the default logger, whatever the configured default
DEFAULT_APP = 'LOGS'

# Process-wide default logger, built on first use
_default_logger: Logger | None = None
_default_lock = threading.Lock()


def get_default_logger() -> Logger:
    """Get the default logger (app LOGS, file logging on, no webhook).

    Built once per process; concurrent first calls get the same instance.
    """
    global _default_logger
    if _default_logger is None:
        with _default_lock:
            if _default_logger is None:
                _default_logger = Logger(LoggerConfig(app_name=DEFAULT_APP, file_logging=True))
    return _default_logger


def set_default_logger(logger: Logger | None) -> None:
    """Replace the default logger.

    Passing None drops the current instance so the next
    get_default_logger() call builds a fresh one.
    """
    global _default_logger
    with _default_lock:
        _default_logger = logger
