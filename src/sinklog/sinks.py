"""Loguru sinks - callables that deliver a formatted line to one destination.

Each sink receives a loguru Message (the formatted line, no trailing
newline), catches its own failures and reports them through the backend, so
one failing destination never stops the next one and logging never raises
into the host application.
"""
from __future__ import annotations

import json
import os
import sys
import threading
import urllib.error
import urllib.request
from collections.abc import Iterable
from contextlib import closing
from typing import IO, TYPE_CHECKING

from sinklog._backend import report

if TYPE_CHECKING:
    from loguru import Message

__all__ = [
    'FileSink',
    'URLSink',
    'fan_out',
]

# One lock per absolute file path, shared by every FileSink in the process.
# Entries are never dropped; there is one per app name and day at most.
_file_locks: dict[str, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: str) -> threading.Lock:
    """Get the append lock for a file path."""
    key = os.path.abspath(path)
    with _file_locks_guard:
        return _file_locks.setdefault(key, threading.Lock())


def fan_out(text: str, streams: Iterable[IO[str]]) -> list[Exception]:
    """Write text to each stream in order.

    A stream that fails does not stop the ones after it.

    Returns
        The exceptions raised by failing streams, in stream order
    """
    errors = []
    for stream in streams:
        try:
            stream.write(text)
            stream.flush()
        except Exception as e:
            errors.append(e)
    return errors


class URLSink:
    """Webhook sink - POSTs the line as {"content": line} JSON.

    The payload shape matches Discord-style webhooks. Any HTTP response
    counts as delivered; only transport failures are reported. No retry, and
    no timeout beyond the platform default.
    """

    def __init__(self, url: str):
        self.url = url

    def __call__(self, message: Message) -> None:
        try:
            data = json.dumps({'content': str(message)}).encode('utf-8')
            request = urllib.request.Request(
                self.url,
                data=data,
                headers={'Content-Type': 'application/json', 'User-Agent': 'sinklog'},
                method='POST',
            )
            with closing(urllib.request.urlopen(request)) as req:
                _ = req.read()
        except urllib.error.HTTPError as e:
            # The server answered; the status is not ours to act on
            e.close()
        except Exception as e:
            report(f'URLSink failed: {e}')


class FileSink:
    """Append-only file sink, mirrored to the console.

    The file is opened and closed for every line. The directory is created on
    demand. Appends to the same path are serialised across threads and across
    sinks, and the console copy is written under the same lock so both
    outputs keep the same line order.
    """

    def __init__(self, path: str, console: IO[str] | None = None):
        self.path = path
        self.console = console

    @property
    def stream(self) -> IO[str]:
        """Console stream, looked up per call so a redirected stdout is used."""
        return self.console if self.console is not None else sys.stdout

    def __call__(self, message: Message) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            try:
                os.makedirs(directory, exist_ok=True)
            except Exception as e:
                report(f'FileSink failed to create logs directory: {e}')
                return

        errors = []
        with _lock_for(self.path):
            try:
                handle = open(self.path, 'a', encoding='utf-8')
            except Exception as e:
                report(f'FileSink failed to open {self.path}: {e}')
                return
            try:
                with handle:
                    errors = fan_out(f'{message}\n', [self.stream, handle])
            except Exception as e:
                errors.append(e)

        for e in errors:
            report(f'FileSink failed to write: {e}')
