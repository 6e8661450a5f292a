"""
Structured logging for data-transform.

Provides context-aware logging with bounded previews of chunk payloads.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from data_transform.config import TransformSettings, get_settings
from data_transform.errors import ConfigError

# Context variable for stream-scoped logging context
_log_context: ContextVar[dict[str, Any] | None] = ContextVar("log_context", default=None)


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return getattr(logging, self.value)


@dataclass
class LogContext:
    """Stream-scoped logging context.

    Attributes:
        stream_id: Identifier of the logical stream being transformed
        transform: Name of the active transform
        extra: Additional context fields
    """

    stream_id: str | None = None
    transform: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        if self.stream_id:
            result["stream_id"] = self.stream_id
        if self.transform:
            result["transform"] = self.transform
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> LogContext:
        """Create new context with additional fields."""
        return LogContext(
            stream_id=self.stream_id,
            transform=self.transform,
            extra={**self.extra, **kwargs},
        )


def get_log_context() -> LogContext:
    """Get current logging context."""
    data = _log_context.get()
    if not data:
        return LogContext()
    data = dict(data)
    return LogContext(
        stream_id=data.pop("stream_id", None),
        transform=data.pop("transform", None),
        extra=data,
    )


def set_log_context(context: LogContext) -> None:
    """Set logging context for the current context."""
    _log_context.set(context.to_dict())


def clear_log_context() -> None:
    """Clear logging context."""
    _log_context.set(None)


class ChunkPreview:
    """Renders a bounded preview of a chunk for log output.

    Log records carry at most ``max_length`` characters of a chunk's ``repr``.
    """

    def __init__(self, max_length: int | None = None) -> None:
        """Initialize preview renderer.

        Args:
            max_length: Max characters kept (default: settings.preview_length)
        """
        self._max_length = max_length

    @property
    def max_length(self) -> int:
        if self._max_length is not None:
            return self._max_length
        try:
            return get_settings().preview_length
        except ConfigError:
            return TransformSettings.preview_length

    def render(self, value: Any) -> str:
        """Render a preview of one chunk or item.

        Args:
            value: Chunk, item or marker

        Returns:
            Truncated repr, suffixed with '...' when cut. Never raises.
        """
        try:
            text = repr(value)
        except Exception:
            text = f"<{type(value).__name__} (repr failed)>"
        limit = self.max_length
        if len(text) <= limit:
            return text
        return text[:limit] + "..."


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "timestamp": time.strftime(
                "%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)
            ) + f".{int(record.msecs):03d}Z",
        }

        context = get_log_context()
        if context_dict := context.to_dict():
            log_data["context"] = context_dict

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text."""
        result = super().format(record)

        fields = get_log_context().to_dict()
        fields.update(getattr(record, "extra_fields", {}))
        if fields:
            result = f"{result} | " + " ".join(f"{k}={v}" for k, v in fields.items())

        return result


class TransformLogger:
    """Logger for data-transform with structured logging support.

    Example:
        >>> logger = TransformLogger.get_logger("data_transform.base")
        >>> logger.debug("Chunk fed", count=3)
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _level: ClassVar[LogLevel | None] = None
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def configure(
        cls,
        level: LogLevel = LogLevel.INFO,
        format: str = "text",
        stream: Any = None,
    ) -> None:
        """Configure global logging settings.

        Args:
            level: Log level
            format: Output format ('json' or 'text')
            stream: Output stream (default: stderr)
        """
        cls._level = level

        formatter: logging.Formatter
        if format == "json":
            formatter = JsonFormatter()
        else:
            formatter = TextFormatter()

        cls._handler = logging.StreamHandler(stream or sys.stderr)
        cls._handler.setFormatter(formatter)
        cls._handler.setLevel(level.to_logging_level())

        for logger in cls._loggers.values():
            logger.handlers.clear()
            logger.addHandler(cls._handler)
            logger.setLevel(level.to_logging_level())
            logger.propagate = False

    @classmethod
    def reset(cls) -> None:
        """Drop the configured handler, returning loggers to propagation."""
        for logger in cls._loggers.values():
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)
            logger.propagate = True
        cls._level = None
        cls._handler = None

    @classmethod
    def get_logger(cls, name: str) -> TransformLogger:
        """Get or create a logger.

        Loggers created before configure() carry no handler of their own and
        propagate to the root logger, so library output stays silent unless
        the application configures logging.

        Args:
            name: Logger name

        Returns:
            Logger instance
        """
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            if cls._handler is not None and cls._level is not None:
                logger.handlers.clear()
                logger.addHandler(cls._handler)
                logger.setLevel(cls._level.to_logging_level())
                logger.propagate = False
            cls._loggers[name] = logger

        return cls(cls._loggers[name])

    def __init__(self, logger: logging.Logger) -> None:
        """Initialize with underlying logger."""
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check whether a record at this level would be handled."""
        return self._logger.isEnabledFor(level.to_logging_level())

    def _log(
        self, level: int, msg: str, exc_info: bool = False, **kwargs: Any
    ) -> None:
        """Internal log method."""
        extra = {"extra_fields": kwargs} if kwargs else {}
        self._logger.log(level, msg, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, msg, exc_info=exc_info, **kwargs)


# Convenience function
def get_logger(name: str) -> TransformLogger:
    """Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return TransformLogger.get_logger(name)
