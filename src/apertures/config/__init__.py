"""
Configuration management for the apertures package.

Settings are loaded from TOML files and APERTURES_* environment variables:

Configuration hierarchy:
1. Default values (built-in)
2. config/default.toml (project defaults)
3. config/local.toml (user overrides, gitignored)
4. APERTURES_CONFIG_PATH
5. Environment variables (APERTURES_* prefix)

Example:
    >>> from apertures.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(settings.logging.format)
"""

from apertures.config.settings import (
    LoggingSettings,
    Settings,
    get_settings,
    load_settings,
    reload_settings,
)

__all__ = [
    "LoggingSettings",
    "Settings",
    "get_settings",
    "load_settings",
    "reload_settings",
]
