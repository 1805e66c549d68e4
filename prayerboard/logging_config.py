"""
Logging configuration for the prayer board service.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "prayerboard-console"


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """
    Send application logs to stdout.

    Safe to call more than once (the app factory runs per test); the console
    handler is only installed the first time.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    if not any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root_logger


class RequestLogger:
    """Formats one line per API request."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_request(
        self, method: str, path: str, status_code: int, duration_ms: float
    ) -> None:
        line = f"{method} {path} {status_code} in {duration_ms:.0f}ms"
        if status_code >= 500:
            self.logger.error(line)
        elif status_code >= 400:
            self.logger.warning(line)
        else:
            self.logger.info(line)
