"""Structured logging configuration.

Installs a single stdout handler on the root logger.  The level comes from
``settings.LOG_LEVEL``; scheduler and HTTP client chatter is kept at WARNING
so the sweep's own events stay readable.
"""

import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "hpack",
    "uvicorn.access",
    "apscheduler",
)


def setup_logging() -> None:
    """Configure the root logger for the application.

    Safe to call more than once: existing root handlers are replaced rather
    than duplicated.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
