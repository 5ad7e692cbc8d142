"""Structured logging setup for the editor host process."""

import logging
import sys
from typing import Any

import structlog

from tandem.config import settings


def configure_logging(
    log_level: str | None = None, log_format: str | None = None
) -> None:
    """Route structlog events through the stdlib root logger to stderr.

    The editor host may read the extension's stdout, so nothing is logged
    there.

    Args:
        log_level: Level name; unknown names fall back to INFO
            (defaults to settings.logging.log_level)
        log_format: "json" or "console" (defaults to settings.logging.log_format)
    """
    level_name = (log_level or settings.logging.log_level).upper()
    log_format = log_format or settings.logging.log_format

    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    renderer: Any = (
        structlog.dev.ConsoleRenderer()
        if log_format == "console"
        else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[*_event_processors(log_format), renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _event_processors(log_format: str) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_format != "console":
        # ConsoleRenderer formats exceptions itself
        processors.append(structlog.processors.format_exc_info)
    return processors
