"""structlog configuration for applications embedding the cache.

The library itself only calls ``structlog.get_logger``; wiring renderers is
left to the owning service, which can use :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys

import structlog

from alt_conncache.config import get_settings


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        level: Log level name (case-insensitive). Unknown names fall back to
            INFO. Defaults to ``CacheSettings.log_level``.
        log_format: ``"console"`` for human-readable output, anything else for
            JSON. Defaults to ``CacheSettings.log_format``.
    """
    if level is None or log_format is None:
        settings = get_settings()
        level = level or settings.log_level
        log_format = log_format or settings.log_format

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if log_format == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
