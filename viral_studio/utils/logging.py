"""
Logging setup for the API process and Celery workers.

Every record carries the current request id (``-`` outside a request)
so the lines of one generation or refinement can be followed across
the pipeline, the provider calls and the persistence layer.
"""

import logging
import logging.handlers
import os
from typing import Any, Mapping

from flask import g, has_request_context

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'

# Provider and storage SDKs log every HTTP round trip at INFO
THIRD_PARTY_LEVELS = {
    'werkzeug': logging.WARNING,
    'litellm': logging.WARNING,
    'LiteLLM': logging.WARNING,
    'httpx': logging.WARNING,
    'httpcore': logging.WARNING,
    'postgrest': logging.WARNING,
    'celery': logging.INFO,
}


class RequestIdFilter(logging.Filter):
    """Attach the Flask request id, if any, to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _current_request_id()
        return True


def _current_request_id() -> str:
    if has_request_context():
        return getattr(g, 'request_id', '-')
    return '-'


def _file_handler(config: Mapping[str, Any]):
    log_file = config.get('LOG_FILE')
    if not log_file:
        return None

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    return logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=config.get('LOG_MAX_BYTES', 10485760),
        backupCount=config.get('LOG_BACKUP_COUNT', 5),
        encoding='utf-8'
    )


def setup_logging(config: Mapping[str, Any]):
    """
    Install console and rotating file handlers on the root logger.

    Args:
        config: Flask ``app.config`` or any mapping with the LOG_* settings
    """
    level = getattr(logging, str(config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
    request_filter = RequestIdFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handlers = [logging.StreamHandler(), _file_handler(config)]
    for handler in filter(None, handlers):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(request_filter)
        root_logger.addHandler(handler)

    configure_loggers()


def configure_loggers():
    """Quiet chatty third-party loggers."""
    for name, level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level)
