"""Line formatting - level labels, caller depth and the two line layouts.

INFO lines are plain:

    [2024-05-01][13:45:10.123][myapp]-[INFO] Application started

Every other level is decorated with the call site:

    [2024-05-01][13:45:10.123][myapp]-[ERROR] worker.py:42:run(): Job failed

LineFormat is a loguru format callable: it picks the layout per record and
returns a template over loguru record fields.
"""
from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum, StrEnum
from typing import Any

__all__ = ['Level', 'CallerDepth', 'LineFormat', 'compose_message']


class Level(StrEnum):
    """Log levels, valued by their display label."""
    TRACE = 'TRACE'
    DEBUG = 'DEBUG'
    INFO = 'INFO'
    NOTICE = 'NOTICE'
    WARNING = 'WARNING'
    ERROR = 'ERROR'
    FATAL = 'FATAL'


class CallerDepth(IntEnum):
    """Wrapper frames between the user's code and a Logger level method."""
    DIRECT = 0
    FORWARDED = 1

    @classmethod
    def resolve(cls, value: Any) -> CallerDepth:
        """Map a depth token to a member, falling back to DIRECT.

        >>> CallerDepth.resolve(1)
        <CallerDepth.FORWARDED: 1>
        >>> CallerDepth.resolve('1')
        <CallerDepth.FORWARDED: 1>
        >>> CallerDepth.resolve('bogus')
        <CallerDepth.DIRECT: 0>
        >>> CallerDepth.resolve(7)
        <CallerDepth.DIRECT: 0>
        """
        try:
            return cls(int(value))
        except (TypeError, ValueError, OverflowError):
            return cls.DIRECT


def compose_message(message: str, extra: Iterable[str] = (),
                    depth: CallerDepth | int = CallerDepth.DIRECT) -> str:
    """Join the message and its extra fragments.

    The fragments are space separated after a single space, so no fragments
    leaves a trailing space. Forwarded calls drop the fragments.

    >>> compose_message('msg', ('x', 'y'))
    'msg x y'
    >>> compose_message('msg')
    'msg '
    >>> compose_message('msg', ('x',), CallerDepth.FORWARDED)
    'msg '
    """
    joined = ''
    if CallerDepth.resolve(depth) == CallerDepth.DIRECT:
        joined = ' '.join(str(part) for part in extra)
    return f'{message} {joined}'


class LineFormat:
    """Loguru format callable for sinklog lines.

    The app name comes from extra[app]. Records flagged extra[unresolved]
    get ':0:()' in place of the call site. Templates carry no trailing
    newline; sinks add their own.
    """

    def __init__(self, show_date: bool = True, show_time: bool = True):
        self.show_date = show_date
        self.show_time = show_time
        stamp = ''
        if show_date:
            stamp += '[{time:YYYY-MM-DD}]'
        if show_time:
            stamp += '[{time:HH:mm:ss.SSS}]'
        self._prefix = stamp + '[{extra[app]}]-[{level.name}] '

    def __call__(self, record) -> str:
        if record['level'].name == Level.INFO:
            return self._prefix + '{message}'
        if record['extra'].get('unresolved'):
            return self._prefix + ':0:(): {message}'
        return self._prefix + '{file.name}:{line}:{function}(): {message}'
