"""Minimal logging with console, file and webhook sinks.

Public API - users should only import from this module.

Usage:
    import sinklog

    # Module-level logging on the default logger ('LOGS', file logging on)
    sinklog.info('Application started')
    sinklog.error('Something failed')

    # Dedicated logger
    log = sinklog.Logger(
        app_name='myapp',
        webhook_url='https://discord.com/api/webhooks/...',
        file_logging=True,
    )
    log.warning('Disk almost full', '/var', '93%')

INFO lines are plain; every other level also shows file:line:function()
of the call site. Lines go to the webhook (when a URL is set) and to
logs/<app>-<date>.log plus stdout (when file logging is on).
"""
from sinklog._format import CallerDepth, Level
from sinklog._logger import Logger, LoggerConfig
from sinklog._logger import get_default_logger, set_default_logger


def _forward(level: Level, message: str) -> None:
    """Log on the default logger on behalf of a module-level function."""
    get_default_logger()._log(level, message, depth=CallerDepth.FORWARDED)


# Module-level convenience functions
def trace(message: str) -> None:
    """Log a trace message."""
    _forward(Level.TRACE, message)


def debug(message: str) -> None:
    """Log a debug message."""
    _forward(Level.DEBUG, message)


def info(message: str) -> None:
    """Log an info message."""
    _forward(Level.INFO, message)


def notice(message: str) -> None:
    """Log a notice message."""
    _forward(Level.NOTICE, message)


def warning(message: str) -> None:
    """Log a warning message."""
    _forward(Level.WARNING, message)


def error(message: str) -> None:
    """Log an error message."""
    _forward(Level.ERROR, message)


def fatal(message: str) -> None:
    """Log a fatal message. Does not exit the process."""
    _forward(Level.FATAL, message)


__all__ = [
    # Configuration
    'Logger',
    'LoggerConfig',
    'Level',
    'CallerDepth',
    # Default logger access
    'get_default_logger',
    'set_default_logger',
    # Logging methods
    'trace',
    'debug',
    'info',
    'notice',
    'warning',
    'error',
    'fatal',
]
