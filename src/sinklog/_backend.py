"""Loguru backend - internal implementation detail.

This module is NOT part of the public API. Users should never import from here.
To switch backends, only this file needs to change.

Every Logger gets a key bound into its records (extra[sinklog_id]); its sinks
are loguru handlers filtered on that key, so loggers never see each other's
lines. Sink failures are reported as plain loguru warnings, which reach stderr
through the default handler.
"""
from __future__ import annotations

import itertools
import sys
import threading
from collections.abc import Callable, Iterable
from contextlib import suppress
from typing import Any

from loguru import logger as _loguru

__all__ = ['LOGGER_KEY', 'get_backend', 'report']

# extra[] key tying a record to the Logger that emitted it
LOGGER_KEY = 'sinklog_id'

# Levels loguru does not define out of the box
_EXTRA_LEVELS = (
    ('NOTICE', 25, '<cyan><bold>'),
    ('FATAL', 50, '<RED><bold>'),
)

# Same layout as loguru's own stderr handler
FMT_STDERR = ('<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | '
              '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>')


def _not_sinklog(record) -> bool:
    """Filter out records emitted by sinklog Loggers."""
    return LOGGER_KEY not in record['extra']


def _for_key(key: int) -> Callable[[Any], bool]:
    """Filter keeping only the records of one Logger."""
    def _filter(record) -> bool:
        return record['extra'].get(LOGGER_KEY) == key
    return _filter


class LoguruBackend:
    """Loguru-based logging backend."""

    def __init__(self):
        self._keys = itertools.count(1)
        self._register_levels()
        self._isolate_default_handler()

    def _register_levels(self) -> None:
        """Add NOTICE and FATAL next to loguru's built-in levels."""
        for name, no, color in _EXTRA_LEVELS:
            try:
                _loguru.level(name)
            except ValueError:
                _loguru.level(name, no=no, color=color)

    def _isolate_default_handler(self) -> None:
        """Keep loguru's default stderr handler from echoing sinklog lines.

        Handler 0 is swapped for an equivalent one that skips records bound
        to a Logger; other records (including sink failure reports) still
        reach stderr. Nothing happens if the application already removed it.
        """
        try:
            _loguru.remove(0)
        except ValueError:
            return
        _loguru.add(sys.stderr, level='DEBUG', format=FMT_STDERR, filter=_not_sinklog)

    def new_key(self) -> int:
        """Allocate the key of a new Logger."""
        return next(self._keys)

    def bind(self, key: int, **extra):
        """Get a loguru logger whose records carry the Logger key."""
        return _loguru.bind(**{LOGGER_KEY: key}, **extra)

    def add_sink(self, sink: Callable[[Any], None], key: int, format: Callable[[Any], str]) -> int:
        """Add a sink receiving only the records of Logger `key`."""
        return _loguru.add(sink, level=0, format=format, filter=_for_key(key), colorize=False)

    def remove_sinks(self, sink_ids: Iterable[int]) -> None:
        """Remove sinks by ID, ignoring ones already gone."""
        for sink_id in sink_ids:
            with suppress(ValueError):
                _loguru.remove(sink_id)

    def log(self, bound, level: str, msg: str, depth: int = 0) -> None:
        """Emit a record through a bound logger.

        depth counts frames above the caller of log(): 0 attributes the
        record to that caller. When the stack is not deep enough the record
        is still emitted, flagged with extra[unresolved] so the format can
        show placeholders for the call site.
        """
        try:
            bound.opt(depth=depth + 1).log(level, msg)
        except ValueError:
            bound.bind(unresolved=True).log(level, msg)


# Singleton backend instance
_backend: LoguruBackend | None = None
_backend_lock = threading.Lock()


def get_backend() -> LoguruBackend:
    """Get the singleton backend instance."""
    global _backend
    if _backend is None:
        with _backend_lock:
            if _backend is None:
                _backend = LoguruBackend()
    return _backend


def report(msg: str) -> None:
    """Report a non-fatal failure, attributed to the calling sink."""
    _loguru.opt(depth=1).warning(msg)
