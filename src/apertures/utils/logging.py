"""
Logging utilities for the apertures package.

Structured logging via structlog, rendered to the console or as JSON.
Library modules log through ``structlog.get_logger(__name__)``; an
application decides how those events are rendered by calling
``setup_logging`` (or ``configure_logging`` with loaded settings).

Example:
    >>> from apertures.utils import setup_logging, get_logger
    >>>
    >>> setup_logging(level="DEBUG", format="console")
    >>> logger = get_logger(__name__)
    >>> logger.debug("mask_no_overlap", box=(10, 15, 20, 25), shape=(8, 8))
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from apertures.config.settings import Settings


def setup_logging(
    level: str = "INFO",
    format: str = "console",
    *,
    include_timestamp: bool = True,
    include_location: bool = False,
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format ("console" or "json")
        include_timestamp: Include timestamps in output
        include_location: Include source file/line info
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
        force=True,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_location:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    processors.append(structlog.processors.StackInfoRenderer())

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure logging from loaded settings.

    Args:
        settings: Settings to apply; defaults to ``get_settings()``
    """
    if settings is None:
        from apertures.config.settings import get_settings

        settings = get_settings()

    log = settings.logging
    setup_logging(
        level=log.level,
        format=log.format,
        include_timestamp=log.include_timestamp,
        include_location=log.include_location,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger instance
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_context(**kwargs: Any) -> None:
    """Bind context variables for all subsequent log calls.

    Example:
        >>> bind_context(image="frame_042", band="r")
        >>> logger.debug("mask_no_overlap")  # includes image and band
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
