"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the lambda handler's `__init__.py` file
before any other logging is done.

Logging format:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "shrinklink.lambdas.redirect_url.app",
    "message": "Redirecting client to target URL. Responding with 301.",
    "event": "REDIRECT_SUCCESS",
    "shortcode": "my-link"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shrinklink.constants import ENV


class JsonFormatter(logging.Formatter):
    """One JSON object per line, carrying every `extra` field of the LogRecord"""

    STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {'message', 'asctime', 'taskName'}

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update({key: value for key, value in record.__dict__.items() if key not in self.STANDARD_ATTRS})

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # default=str: extras may carry datetimes and enums
        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(ENV.App.LOG_LEVEL, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
            'loggers': {
                # boto3 debug output drowns the application logs
                'botocore': {'level': 'WARNING'},
                'urllib3': {'level': 'WARNING'},
            },
        }
    )
