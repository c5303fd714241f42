"""
Utility functions for the apertures package.

Logging:
- setup_logging(): Configure structured logging with structlog
- configure_logging(settings): Apply the logging section of Settings
- get_logger(name): Get a logger instance
- bind_context(**kw) / clear_context(): Context carried by every log call
"""

from apertures.utils.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    setup_logging,
)

__all__ = [
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "setup_logging",
]
