"""
Settings for data-transform.

Settings are read from environment variables:
- DATA_TRANSFORM_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
- DATA_TRANSFORM_LOG_FORMAT: 'text' or 'json'
- DATA_TRANSFORM_PREVIEW_LENGTH: max characters of a chunk shown in logs
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar

from data_transform.errors import ConfigError

ENV_LOG_LEVEL = "DATA_TRANSFORM_LOG_LEVEL"
ENV_LOG_FORMAT = "DATA_TRANSFORM_LOG_FORMAT"
ENV_PREVIEW_LENGTH = "DATA_TRANSFORM_PREVIEW_LENGTH"


@dataclass
class TransformSettings:
    """Process-wide settings.

    Attributes:
        log_level: Name of the log level
        log_format: Output format of the library handler ('text' or 'json')
        preview_length: Max characters of a chunk preview in log records
    """

    LOG_LEVELS: ClassVar[tuple[str, ...]] = (
        "DEBUG",
        "INFO",
        "WARNING",
        "ERROR",
        "CRITICAL",
    )
    LOG_FORMATS: ClassVar[tuple[str, ...]] = ("text", "json")

    log_level: str = "INFO"
    log_format: str = "text"
    preview_length: int = 40

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        self.log_format = self.log_format.lower()
        if self.log_level not in self.LOG_LEVELS:
            raise ConfigError(
                f"Unknown log level: {self.log_level}", key="log_level", value=self.log_level
            ).with_hint(f"Use one of {', '.join(self.LOG_LEVELS)}")
        if self.log_format not in self.LOG_FORMATS:
            raise ConfigError(
                f"Unknown log format: {self.log_format}",
                key="log_format",
                value=self.log_format,
            ).with_hint("Use 'text' or 'json'")
        if self.preview_length < 0:
            raise ConfigError(
                "preview_length must not be negative",
                key="preview_length",
                value=self.preview_length,
            )

    @classmethod
    def default(cls) -> TransformSettings:
        """Create default settings."""
        return cls()

    @classmethod
    def from_env(cls) -> TransformSettings:
        """Create settings from environment variables.

        Raises:
            ConfigError: If a variable holds an invalid value
        """
        raw_length = os.getenv(ENV_PREVIEW_LENGTH, "40")
        try:
            preview_length = int(raw_length)
        except ValueError:
            raise ConfigError(
                f"{ENV_PREVIEW_LENGTH} must be an integer",
                key=ENV_PREVIEW_LENGTH,
                value=raw_length,
            ) from None

        return cls(
            log_level=os.getenv(ENV_LOG_LEVEL, "INFO"),
            log_format=os.getenv(ENV_LOG_FORMAT, "text"),
            preview_length=preview_length,
        )


_settings: TransformSettings | None = None


def get_settings() -> TransformSettings:
    """Get the process-wide settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = TransformSettings.from_env()
    return _settings


def set_settings(settings: TransformSettings | None) -> None:
    """Replace the process-wide settings.

    Passing None makes the next get_settings() call re-read the environment.
    """
    global _settings
    _settings = settings


def configure_logging(settings: TransformSettings | None = None) -> None:
    """Apply settings to the library's loggers.

    Args:
        settings: Settings to apply (default: get_settings())
    """
    from data_transform.telemetry.logger import LogLevel, TransformLogger

    if settings is not None:
        set_settings(settings)
    active = get_settings()
    TransformLogger.configure(
        level=LogLevel(active.log_level),
        format=active.log_format,
    )
