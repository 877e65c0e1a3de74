"""
Request logging middleware.

Tags each request with an id (honouring an incoming ``X-Request-ID``)
and logs its outcome. Request bodies are only logged at DEBUG, with
credentials masked and long free-text fields such as scripts shortened.
"""

import logging
import time
import uuid
from typing import Any, Dict

from flask import request, g


logger = logging.getLogger(__name__)

SENSITIVE_KEYS = frozenset(['api_key', 'llm_key', 'password', 'access_token', 'token'])
MAX_LOGGED_TEXT = 120


def summarize_body(data: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a JSON body that is safe to write to the log."""
    summary = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            summary[key] = '***'
        elif isinstance(value, str) and len(value) > MAX_LOGGED_TEXT:
            summary[key] = f"{value[:MAX_LOGGED_TEXT]}... ({len(value)} chars)"
        elif isinstance(value, dict):
            summary[key] = summarize_body(value)
        else:
            summary[key] = value
    return summary


class LoggingMiddleware:
    """Flask before/after hooks for request logging."""

    @staticmethod
    def before_request():
        g.start_time = time.time()
        g.request_id = request.headers.get('X-Request-ID') or f"req_{uuid.uuid4().hex[:12]}"

        logger.info(f"{request.method} {request.path} from {request.remote_addr}")

        if request.method == 'POST' and logger.isEnabledFor(logging.DEBUG):
            data = request.get_json(silent=True)
            if isinstance(data, dict):
                logger.debug(f"Request body: {summarize_body(data)}")

    @staticmethod
    def after_request(response):
        if 'start_time' not in g:
            return response

        duration = time.time() - g.start_time
        log = logger.warning if response.status_code >= 400 else logger.info
        log(f"{request.method} {request.path} -> {response.status_code} in {duration:.3f}s")

        response.headers['X-Request-ID'] = g.request_id
        return response
