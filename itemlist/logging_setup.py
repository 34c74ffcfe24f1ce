"""Central logging configuration for the application.

Applies a root stdout handler so all module loggers emit INFO-level logs
without requiring per-module setup. Keeps uvicorn loggers visible and avoids
duplicate handlers on reloads. Every record carries the current request id
(or "-" outside a request).
"""
from __future__ import annotations
import logging
from logging.config import dictConfig

from itemlist.http.request_id import current_request_id


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id() or "-"
        return True


_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "request_id": {"()": RequestIdFilter},
    },
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s:%(name)s:[%(request_id)s] %(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "default",
            "filters": ["request_id"],
            "stream": "ext://sys.stdout",
        }
    },
    "root": {"level": "INFO", "handlers": ["console"]},
    "loggers": {
        "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
        "uvicorn.error": {"level": "INFO", "handlers": ["console"], "propagate": False},
        "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
    },
}

def configure_logging() -> None:
    """Configure application-wide logging once.

    If the root logger already has handlers, return to prevent duplicate output
    (important under reloaders/watchers and pytest's log capture).
    """
    root = logging.getLogger()
    if root.handlers:
        return
    dictConfig(_DICT_CONFIG)
