"""错误基类：区分变换器的配置错误与配置值错误。

Error classes for data-transform.

Provides a small layered hierarchy:
- TransformError: Base class for all library errors
- TransformConfigError: A transform subclass is not usable (programming error)
- ConfigError: An invalid settings value

Malformed stream data is never raised; it travels through the buffer as a
StreamError marker instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ErrorContext:
    """Structured error context for diagnostics."""

    source: str | None = None
    """Error source (e.g., 'transform', 'config')"""

    transform: str | None = None
    """Name of the transform class involved"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.transform:
            parts.append(f"in '{self.transform}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class TransformError(Exception):
    """Base class for all data-transform errors.

    Attributes:
        message: Human-readable error message
        context: Structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> TransformError:
        """Add a hint to this error."""
        self.context.hint = hint
        self.args = (self._format_message(),)
        return self


class TransformConfigError(TransformError, TypeError):
    """A transform class cannot be used as written.

    Raised when:
    - The abstract Transform base is instantiated directly
    - A subclass leaves handle_chunk, clone or emit unimplemented

    This is a programming error in the subclass and must not be retried.
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        transform: str | None = None,
        missing: list[str] | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="transform")
        if transform:
            ctx.transform = transform
        if missing:
            ctx.details["missing"] = list(missing)
        super().__init__(message, ctx)
        self.transform = transform
        self.missing = list(missing or [])


class ConfigError(TransformError, ValueError):
    """Invalid settings value, usually read from the environment."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        key: str | None = None,
        value: Any = None,
    ) -> None:
        ctx = context or ErrorContext(source="config")
        if key:
            ctx.details["key"] = key
        if value is not None:
            ctx.details["value"] = value
        super().__init__(message, ctx)
        self.key = key
        self.value = value
