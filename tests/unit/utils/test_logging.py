import sys
import json
import logging
from datetime import datetime, UTC

import pytest

from shrinklink.utils.logging import JsonFormatter, initialize_logging


def _record(msg='Hello %s', args=('world',), **extra):
    record = logging.makeLogRecord({'name': 'shrinklink.test', 'levelname': 'INFO', 'levelno': logging.INFO, 'msg': msg, 'args': args})
    record.__dict__.update(extra)
    return record


@pytest.fixture
def root_logger():
    """Restore the root logger configuration after the test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_includes_extra_fields():
    log = json.loads(JsonFormatter().format(_record(event='REDIRECT_SUCCESS', shortcode='my-link')))

    assert log['level'] == 'INFO'
    assert log['logger'] == 'shrinklink.test'
    assert log['message'] == 'Hello world'
    assert log['event'] == 'REDIRECT_SUCCESS'
    assert log['shortcode'] == 'my-link'
    assert log['timestamp'].endswith('Z')
    assert 'msg' not in log
    assert 'args' not in log


def test_json_formatter_serializes_exceptions():
    try:
        raise RuntimeError('boom')
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    log = json.loads(JsonFormatter().format(record))

    assert 'RuntimeError: boom' in log['exception']


def test_json_formatter_handles_non_json_extras():
    log = json.loads(JsonFormatter().format(_record(at=datetime(2025, 10, 15, tzinfo=UTC))))

    assert log['at'] == '2025-10-15 00:00:00+00:00'


def test_initialize_logging(monkeypatch, root_logger):
    monkeypatch.setenv('LOG_LEVEL', 'debug')

    initialize_logging()

    assert root_logger.level == logging.DEBUG
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in root_logger.handlers)
    assert logging.getLogger('botocore').level == logging.WARNING
