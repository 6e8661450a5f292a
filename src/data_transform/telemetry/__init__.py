"""
Telemetry module for data-transform.

Provides structured logging for transforms.
"""

from data_transform.telemetry.logger import (
    ChunkPreview,
    JsonFormatter,
    LogContext,
    LogLevel,
    TextFormatter,
    TransformLogger,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
)

__all__ = [
    "ChunkPreview",
    "JsonFormatter",
    "LogContext",
    "LogLevel",
    "TextFormatter",
    "TransformLogger",
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "set_log_context",
]
