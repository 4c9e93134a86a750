"""Structured logging for the slot API.

Every event is one JSON line on stdout. Events logged while a request is in
flight carry its `request_id`, the same value the client sees in the
X-Request-ID response header.
"""
import logging
import sys
import uuid

import structlog

from slotbook import config

# Cyrillic master names and alerts stay readable in the log lines
_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.format_exc_info,
    structlog.processors.JSONRenderer(ensure_ascii=False),
]


def setup_structured_logging(log_level: str = config.LOG_LEVEL):
    """
    Route structlog through stdlib logging at the given level.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR
    """
    structlog.configure(
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """`req-` plus 12 hex chars."""
    return f"req-{uuid.uuid4().hex[:12]}"


class RequestIDMiddleware:
    """WSGI middleware that tags every request with an ID.

    The ID is exposed in the environ as REQUEST_ID, bound to the structlog
    context while the app handles the request, and echoed as X-Request-ID.
    """

    def __init__(self, app):
        self.app = app

    def __call__(self, environ, start_response):
        request_id = generate_request_id()
        environ['REQUEST_ID'] = request_id

        def start_response_with_id(status, headers, exc_info=None):
            headers.append(('X-Request-ID', request_id))
            return start_response(status, headers, exc_info)

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            return self.app(environ, start_response_with_id)
