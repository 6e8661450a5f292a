"""Root pytest fixtures and sample transforms for data-transform tests."""

from __future__ import annotations

from collections import deque
from typing import Any

import pytest

from data_transform import StreamError, Transform, set_settings
from data_transform.config import ENV_LOG_FORMAT, ENV_LOG_LEVEL, ENV_PREVIEW_LENGTH
from data_transform.telemetry import TransformLogger, clear_log_context


class EchoTransform(Transform):
    """Returns every chunk unchanged as an item."""

    def handle_chunk(self, chunk: Any = None) -> Any:
        return chunk

    def emit(self, items: Any) -> list[Any]:
        return list(items)

    def clone(self) -> EchoTransform:
        return EchoTransform()


class LineTransform(Transform):
    """Splits text chunks into lines; one chunk may complete several lines."""

    def __init__(self, separator: str = "\n") -> None:
        self.separator = separator
        self._partial = ""
        self._lines: deque[str] = deque()

    def handle_chunk(self, chunk: str | None = None) -> str | None:
        if chunk is not None:
            self._partial += chunk
            *complete, self._partial = self._partial.split(self.separator)
            self._lines.extend(complete)
        if self._lines:
            return self._lines.popleft()
        return None

    def emit(self, items: Any) -> list[str]:
        lines = list(items)
        if not lines:
            return []
        return ["".join(f"{line}{self.separator}" for line in lines)]

    def clone(self) -> LineTransform:
        return LineTransform(self.separator)


class IntTransform(Transform):
    """Parses each chunk as an integer, reporting bad chunks as StreamError."""

    def handle_chunk(self, chunk: str | None = None) -> int | StreamError | None:
        if chunk is None:
            return None
        try:
            return int(chunk)
        except ValueError:
            return StreamError(f"not an integer: {chunk!r}")

    def emit(self, items: Any) -> list[str]:
        return [str(item) for item in items]

    def clone(self) -> IntTransform:
        return IntTransform()


def drain(transform: Transform) -> list[Any]:
    """Call take_one until it comes back empty."""
    results: list[Any] = []
    while taken := transform.take_one():
        assert len(taken) == 1
        results.extend(taken)
    return results


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Run every test against default settings and unconfigured loggers."""
    for name in (ENV_LOG_LEVEL, ENV_LOG_FORMAT, ENV_PREVIEW_LENGTH):
        monkeypatch.delenv(name, raising=False)
    set_settings(None)
    yield
    set_settings(None)
    TransformLogger.reset()
    clear_log_context()


@pytest.fixture
def echo() -> EchoTransform:
    return EchoTransform()


@pytest.fixture
def lines() -> LineTransform:
    return LineTransform()


@pytest.fixture
def ints() -> IntTransform:
    return IntTransform()


@pytest.fixture(name="drain")
def drain_fixture():
    return drain
