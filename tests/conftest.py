import pytest
from loguru import logger as _loguru

import sinklog
from sinklog._backend import LOGGER_KEY


@pytest.fixture
def diagnostics():
    """Collect messages reported on the diagnostic channel."""
    messages = []
    sink_id = _loguru.add(lambda m: messages.append(m.record['message']),
                          level='WARNING', format='{message}',
                          filter=lambda record: LOGGER_KEY not in record['extra'])
    yield messages
    _loguru.remove(sink_id)


@pytest.fixture
def default_logger_reset():
    """Drop the default logger before and after the test."""
    sinklog.set_default_logger(None)
    yield
    sinklog.set_default_logger(None)


@pytest.fixture
def capture():
    """Attach a sink collecting a logger's formatted lines."""
    def _capture(logger):
        lines = []
        logger._add_sink(lines.append)
        return lines
    return _capture
