#!/usr/bin/env python3
"""
Mid-stream transform switch example.

A connection starts with a line-based header section and switches to raw
passthrough after a blank line, the way an HTTP/1.x reader switches from
headers to body. take_one() stops right after the blank line, so the body
chunks are still buffered and can be handed to the next transform.

Usage:
    DATA_TRANSFORM_LOG_LEVEL=debug python examples/switch_transform.py
"""

from collections import deque
from typing import Any

from data_transform import (
    EndOfStream,
    StreamError,
    Transform,
    configure_logging,
    transfer_pending,
)
from data_transform.telemetry import LogContext, set_log_context


class HeaderLines(Transform):
    """Parses 'Name: value' lines; a blank line yields an empty dict."""

    def __init__(self) -> None:
        self._partial = ""
        self._lines: deque[str] = deque()

    def handle_chunk(self, chunk: str | None = None) -> Any:
        if chunk is not None:
            *complete, self._partial = (self._partial + chunk).split("\n")
            self._lines.extend(complete)
        if not self._lines:
            return None

        line = self._lines.popleft()
        if not line:
            return {}
        name, sep, value = line.partition(":")
        if not sep:
            return StreamError(f"malformed header: {line!r}")
        return {name.strip().lower(): value.strip()}

    def emit(self, items: Any) -> list[str]:
        lines = [f"{k}: {v}" for item in items for k, v in item.items()]
        return ["\n".join(lines) + "\n\n"]

    def clone(self) -> "HeaderLines":
        return HeaderLines()


class Passthrough(Transform):
    """Returns body chunks unchanged."""

    def handle_chunk(self, chunk: Any = None) -> Any:
        return chunk

    def emit(self, items: Any) -> list[Any]:
        return list(items)

    def clone(self) -> "Passthrough":
        return Passthrough()


def main() -> None:
    """Run switch example."""
    configure_logging()
    set_log_context(LogContext(stream_id="example-1"))

    incoming = [
        "Host: example.org\nContent-Le",
        "ngth: 11\nbroken header\n\n",
        "hello",
        " world",
        EndOfStream(),
    ]

    headers = HeaderLines()
    headers.feed(incoming)

    print("Headers:")
    while taken := headers.take_one():
        (item,) = taken
        if isinstance(item, StreamError):
            print(f"  [skipped: {item.data}]")
        elif item == {}:
            break
        else:
            print(f"  {item}")

    body = Passthrough()
    moved = transfer_pending(headers, body)
    print(f"\nSwitched to body after moving {moved} buffered element(s)")

    print("Body:")
    for item in body.take_all():
        if isinstance(item, EndOfStream):
            print("  [end of stream]")
        else:
            print(f"  {item!r}")


if __name__ == "__main__":
    main()
