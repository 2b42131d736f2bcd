"""
Logging configuration for the application.

structlog and the standard library share one handler: structlog events are
handed to `ProcessorFormatter` unrendered, so every line, whether it comes from
our code, uvicorn or SQLAlchemy, is rendered exactly once. JSON in production,
console output everywhere else.
"""

import logging
import sys
from typing import Any, Optional, TextIO

import structlog
from asgi_correlation_id import correlation_id

from bookstore.config import Settings, get_settings

HANDLER_NAME = "bookstore"


def add_request_id(logger, method_name, event_dict):
    """Attach the X-Request-ID of the request being served, if any."""
    request_id = correlation_id.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def _renderer(production: bool) -> list[Any]:
    if production:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer()]


def configure_logging(settings: Optional[Settings] = None, stream: Optional[TextIO] = None) -> None:
    """Configure structlog and route stdlib logging through the same renderer."""
    settings = settings or get_settings()
    production = settings.ENVIRONMENT == "production"

    pre_chain: list[Any] = [
        add_request_id,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta] + _renderer(production),
        )
    )

    root_logger = logging.getLogger()
    # Swap out a handler installed by an earlier call; leave foreign handlers alone
    for existing in [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.LOG_LEVEL.upper())
