"""Shared test configuration."""

import logging
import sys

import pytest
import structlog


@pytest.fixture(autouse=True)
def quiet_structlog():
    """Keep library log lines off stdout, where the CLI writes its answer."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()
