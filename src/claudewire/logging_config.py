"""Structured logging via structlog, rendered by stdlib handlers.

structlog events and plain ``logging`` records (httpx, httpcore) share the
same JSON renderer and the same handlers, so the hourly rotating file sees
everything that stderr sees.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler

import structlog

LOG_FILENAME = "claudewire.jsonl"

# Handlers installed by the last setup_logging() call
_installed_handlers: list[logging.Handler] = []

_shared_processors: list = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def _json_formatter() -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )


def setup_logging(log_level: str = "WARNING", log_dir: str | None = None) -> None:
    """Configure JSON logging to stderr, plus hourly rotating files when log_dir is set.

    Safe to call more than once: handlers from a previous call are removed
    and closed before the new ones are installed.
    """
    level = logging.getLevelName(log_level.upper())

    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    formatter = _json_formatter()

    stderr_handler = logging.StreamHandler()
    _installed_handlers.append(stderr_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=os.path.join(log_dir, LOG_FILENAME),
            when="H",
            interval=1,
            backupCount=168,  # 7 days of hourly logs
            utc=True,
        )
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    structlog.configure(
        processors=[
            *_shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
