"""coltypes configuration management.

This module centralizes all configuration loading from environment variables
and provides sensible defaults. All modules should import configuration
values from here rather than reading environment variables directly.

Environment Variables:
    COLTYPES_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
                        Default: INFO

    COLTYPES_LOG_FORMAT: Log output format (text, json)
                         Default: text

    COLTYPES_TIMEZONE: Timezone applied to temporal literals when the caller
                       does not pass one. Named zone ("Europe/Paris") or
                       fixed offset ("+02:00").
                       Default: +00:00

    COLTYPES_DEFAULT_DIALECT: Dialect used by the CLI when none is given
                              Options: mysql, postgres, sqlite, mssql, oracle
                              Default: mysql

    COLTYPES_MSSQL_NO_TIMEZONE: Store MSSQL dates as DATETIME2 without offset
                                Default: false

    COLTYPES_ORACLE_NO_TIMEZONE: Store Oracle dates as TIMESTAMP without zone
                                 Default: false
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment variable."""
    value = os.environ.get(key, "").lower()
    if not value:
        return default
    return value in ("true", "1", "yes", "on")


def _get_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class ColTypesConfig:
    """coltypes configuration container.

    All configuration values are loaded from environment variables
    with sensible defaults.

    Usage:
        from coltypes.core.config import config

        tz = config.timezone
    """

    # Logging Configuration
    log_level: str = field(default_factory=lambda: _get_str("COLTYPES_LOG_LEVEL", "INFO").upper())
    log_format: str = field(default_factory=lambda: _get_str("COLTYPES_LOG_FORMAT", "text"))

    # Literal rendering
    timezone: str = field(default_factory=lambda: _get_str("COLTYPES_TIMEZONE", "+00:00"))
    default_dialect: str = field(default_factory=lambda: _get_str("COLTYPES_DEFAULT_DIALECT", "mysql").lower())

    # Dialect options
    mssql_no_timezone: bool = field(default_factory=lambda: _get_bool("COLTYPES_MSSQL_NO_TIMEZONE", False))
    oracle_no_timezone: bool = field(default_factory=lambda: _get_bool("COLTYPES_ORACLE_NO_TIMEZONE", False))

    def __post_init__(self):
        """Validate configuration after initialization."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_levels:
            raise ValueError(
                f"Invalid COLTYPES_LOG_LEVEL: {self.log_level}. "
                f"Must be one of: {valid_levels}"
            )

        valid_formats = {"text", "json"}
        if self.log_format not in valid_formats:
            raise ValueError(
                f"Invalid COLTYPES_LOG_FORMAT: {self.log_format}. "
                f"Must be one of: {valid_formats}"
            )

        valid_dialects = {"mysql", "postgres", "sqlite", "mssql", "oracle"}
        if self.default_dialect not in valid_dialects:
            raise ValueError(
                f"Invalid COLTYPES_DEFAULT_DIALECT: {self.default_dialect}. "
                f"Must be one of: {valid_dialects}"
            )

        if not self.timezone.strip():
            raise ValueError("COLTYPES_TIMEZONE must not be empty")

    def as_dict(self) -> dict:
        """Export configuration as dictionary.

        Returns:
            Dictionary of all configuration values
        """
        return {
            "log_level": self.log_level,
            "log_format": self.log_format,
            "timezone": self.timezone,
            "default_dialect": self.default_dialect,
            "mssql_no_timezone": self.mssql_no_timezone,
            "oracle_no_timezone": self.oracle_no_timezone,
        }


def load_config() -> ColTypesConfig:
    """Load configuration from environment.

    This function creates a new ColTypesConfig instance by reading
    current environment variables. Call this to refresh config
    if environment has changed.

    Returns:
        New ColTypesConfig instance
    """
    return ColTypesConfig()


# Global configuration instance - loaded once at import time
# Use load_config() to refresh if needed
config = load_config()
