"""
Configuration settings for the apertures package.

The aperture primitives themselves take every option as an explicit
argument; settings only govern the ambient layer (logging).

Configuration hierarchy (later overrides earlier):
1. Default values (built-in)
2. config/default.toml
3. config/local.toml (gitignored)
4. File named by APERTURES_CONFIG_PATH
5. Environment variables (APERTURES_* prefix)

Example:
    >>> from apertures.config import get_settings
    >>>
    >>> settings = get_settings()
    >>> print(f"Log level: {settings.logging.level}")
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "APERTURES_"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_LOG_FORMATS = {"console", "json"}


class LoggingSettings(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="console", description="Output format (console or json)")
    include_timestamp: bool = Field(default=True)
    include_location: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown levels."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in _LOG_FORMATS:
            raise ValueError(f"Unknown log format: {v}")
        return fmt


class Settings(BaseModel):
    """Main settings container."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="apertures")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def _find_config_files() -> list[Path]:
    """Find configuration files in standard locations.

    Returns:
        List of config file paths (in order of priority)
    """
    files = []

    cwd = Path.cwd()
    for name in ["config/default.toml", "config/local.toml"]:
        path = cwd / name
        if path.exists():
            files.append(path)

    env_config = os.environ.get(f"{ENV_PREFIX}CONFIG_PATH")
    if env_config:
        path = Path(env_config)
        if path.exists():
            files.append(path)

    return files


def _load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML file.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML content
    """
    with open(path, "rb") as f:
        return tomllib.load(f)


def _merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _coerce_like(original: Any, value: str) -> Any:
    """Convert an environment string to the type of the value it replaces."""
    if isinstance(original, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(original, int):
        return int(value)
    if isinstance(original, float):
        return float(value)
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides.

    Variables with the APERTURES_ prefix override existing config keys.
    Example: APERTURES_LOGGING_LEVEL -> logging.level,
    APERTURES_LOGGING_INCLUDE_LOCATION -> logging.include_location.
    Unknown keys are ignored.

    Args:
        config: Configuration dictionary

    Returns:
        Modified configuration
    """
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX) or key == f"{ENV_PREFIX}CONFIG_PATH":
            continue

        parts = key[len(ENV_PREFIX) :].lower().split("_")

        current = config
        for i, part in enumerate(parts[:-1]):
            if part in current and isinstance(current[part], dict):
                current = current[part]
            else:
                # Underscored leaf key, e.g. include_location
                remaining = "_".join(parts[i:])
                if remaining in current and not isinstance(current[remaining], dict):
                    current[remaining] = _coerce_like(current[remaining], value)
                break
        else:
            final_key = parts[-1]
            if final_key in current and not isinstance(current[final_key], dict):
                current[final_key] = _coerce_like(current[final_key], value)

    return config


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from configuration files and the environment.

    Args:
        config_path: Optional explicit config file path

    Returns:
        Settings instance
    """
    # Seed with defaults so environment overrides apply without a file
    config: dict[str, Any] = Settings().model_dump()

    if config_path:
        files = [Path(config_path)]
    else:
        files = _find_config_files()

    for path in files:
        config = _merge_dicts(config, _load_toml(path))

    config = _apply_env_overrides(config)

    return Settings(**config)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance (cached after first call)
    """
    return load_settings()


def reload_settings() -> Settings:
    """Reload settings (clears cache).

    Returns:
        Fresh Settings instance
    """
    get_settings.cache_clear()
    return get_settings()
