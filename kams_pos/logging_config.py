"""
Logging configuration for the KAMS POS application.

Every log line carries the ID of the HTTP request that produced it, so a
till complaint ("my order didn't go through") can be traced from the
X-Request-ID the frontend shows back to the server log. RequestIDMiddleware
sets the ID for the duration of a request; outside a request it is "-".

Usage:
    from kams_pos.logging_config import setup_logging
    setup_logging()  # Call once at application startup

Environment variables:
    LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)
"""
import logging
import os
import sys
from contextvars import ContextVar, Token
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Chatty below WARNING: identity provider HTTP calls and SQL echo
NOISY_LOGGERS = ("urllib3", "sqlalchemy.engine", "alembic.runtime.migration")

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


# =============================================================================
# Request Correlation
# =============================================================================

def current_request_id() -> Optional[str]:
    """ID of the request being handled in this context, if any."""
    return _request_id.get()


def set_request_id(request_id: str) -> Token:
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    _request_id.reset(token)


class RequestIDFilter(logging.Filter):
    """Stamp each record with the current request ID ("-" outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get() or "-"
        return True


# =============================================================================
# Setup
# =============================================================================

def setup_logging(level: str = None) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If not provided, reads from LOG_LEVEL env var, defaults to INFO.
               Unknown names fall back to INFO.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()
    if level not in VALID_LEVELS:
        level = "INFO"

    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
    )

    # basicConfig is a no-op once handlers exist, so attach the filter either way
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, RequestIDFilter) for f in handler.filters):
            handler.addFilter(RequestIDFilter())

    logging.getLogger("kams_pos").setLevel(numeric_level)

    if level != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured at %s level", level)
