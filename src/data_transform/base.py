"""
Base abstraction for incremental stream transforms.

A transform owns an input buffer of raw chunks and control markers. Callers
push data in with feed(), then pull parsed items out one at a time with
take_one() or all at once with take_all(). Items go back to chunks through
emit().

Concrete transforms implement three methods:
- handle_chunk(chunk=None): consume one chunk, return an item or None
- clone(): a new instance with the same configuration and an empty buffer
- emit(items): serialize items into output chunks
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from typing import TYPE_CHECKING, Any

from data_transform.errors import TransformConfigError
from data_transform.markers import ControlMarker
from data_transform.telemetry.logger import ChunkPreview, LogLevel, get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

Chunk = Any
Item = Any

_logger = get_logger(__name__)
_preview = ChunkPreview()


class Transform(ABC):
    """Abstract base for pluggable stream transforms.

    The buffer is created when an instance is allocated, so subclasses are
    free to define __init__ without calling super().__init__().

    Example:
        >>> class Echo(Transform):
        ...     def handle_chunk(self, chunk=None):
        ...         return chunk
        ...     def emit(self, items):
        ...         return list(items)
        ...     def clone(self):
        ...         return Echo()
        >>> from data_transform.markers import EndOfStream
        >>> echo = Echo()
        >>> echo.take_all(["AB", EndOfStream(), "CD"])
        ['AB', EndOfStream(data=None), 'CD']
    """

    _buffer: deque[Chunk | ControlMarker]

    def __new__(cls, *args: Any, **kwargs: Any) -> Transform:
        if cls is Transform:
            _logger.error("Abstract Transform instantiated", transform=cls.__name__)
            raise TransformConfigError(
                "Transform is not meant to be used directly",
                transform=cls.__name__,
            ).with_hint("Subclass it and implement handle_chunk, clone and emit")

        missing = sorted(getattr(cls, "__abstractmethods__", ()))
        if missing:
            _logger.error(
                "Transform subclass is incomplete",
                transform=cls.__name__,
                missing=missing,
            )
            raise TransformConfigError(
                f"{cls.__name__} must implement {', '.join(missing)}",
                transform=cls.__name__,
                missing=missing,
            )

        instance = super().__new__(cls)
        instance._buffer = deque()
        return instance

    # Extension points

    @abstractmethod
    def handle_chunk(self, chunk: Chunk | None = None) -> Item | None:
        """Consume one chunk and return a completed item, if any.

        Called without a chunk to retry completion from state the transform
        already holds. With nothing pending, that call must return None.

        Args:
            chunk: A new raw chunk, or None to retry from internal state

        Returns:
            A completed item, or None if more input is needed
        """
        ...

    @abstractmethod
    def clone(self) -> Transform:
        """Create a new transform with the same configuration.

        The clone starts with an empty buffer and no partial-parse state.
        """
        ...

    @abstractmethod
    def emit(self, items: Iterable[Item]) -> list[Chunk]:
        """Serialize items into output chunks.

        Output order follows input order. The number of chunks need not match
        the number of items.

        Args:
            items: Items to serialize

        Returns:
            Output chunks
        """
        ...

    # Public protocol

    def feed(self, chunks: Iterable[Chunk | ControlMarker]) -> None:
        """Append chunks and markers to the buffer without parsing them.

        A bare str, bytes or bytearray is buffered as a single chunk rather
        than split into characters or ints.

        Args:
            chunks: Raw chunks and/or control markers, in arrival order
        """
        before = len(self._buffer)
        if isinstance(chunks, (str, bytes, bytearray)):
            self._buffer.append(chunks)
        else:
            self._buffer.extend(chunks)
        if _logger.is_enabled_for(LogLevel.DEBUG):
            _logger.debug(
                "Chunks buffered",
                transform=type(self).__name__,
                added=len(self._buffer) - before,
                pending=len(self._buffer),
            )

    def take_one(self) -> list[Item | ControlMarker]:
        """Parse at most one item from the buffer (lazy extraction).

        Completion from internal state is tried first. After that, buffer
        elements are consumed from the head until an item is complete or a
        control marker is reached; markers are returned without parsing.

        Returns:
            A list holding one item or marker, or an empty list when nothing
            is available yet
        """
        item = self.handle_chunk()
        if item is not None:
            self._trace("Item completed from pending state", item)
            return [item]

        while self._buffer:
            element = self._buffer.popleft()
            if isinstance(element, ControlMarker):
                self._trace("Control marker passed through", element)
                return [element]
            item = self.handle_chunk(element)
            if item is not None:
                self._trace("Item completed", item)
                return [item]

        return []

    def take_all(
        self, chunks: Iterable[Chunk | ControlMarker] = ()
    ) -> list[Item | ControlMarker]:
        """Feed chunks, then drain every item available (greedy extraction).

        Unparsed remainder stays buffered for the next call. Prefer feed() and
        take_one() when the caller needs to stay responsive or may switch
        transforms mid-stream.

        Args:
            chunks: Raw chunks and/or control markers to feed first

        Returns:
            Items and markers in arrival order
        """
        self.feed(chunks)
        results: list[Item | ControlMarker] = []
        while True:
            taken = self.take_one()
            if not taken:
                break
            results.extend(taken)
        return results

    def peek_pending(self) -> list[Chunk | ControlMarker] | None:
        """Return a copy of the unconsumed buffer, or None if it is empty.

        The buffer itself is left untouched.
        """
        if self._buffer:
            return list(self._buffer)
        return None

    @property
    def pending_count(self) -> int:
        """Number of unconsumed buffer elements."""
        return len(self._buffer)

    def is_transform_base(self) -> bool:
        """Capability flag: always True for conforming transforms.

        Lets a driver recognise transforms without checking their type, so a
        compatible implementation outside this class hierarchy can stand in.
        """
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pending={len(self._buffer)})"

    def _trace(self, message: str, value: Any) -> None:
        if _logger.is_enabled_for(LogLevel.DEBUG):
            _logger.debug(
                message,
                transform=type(self).__name__,
                value=_preview.render(value),
                pending=len(self._buffer),
            )


def is_transform(obj: Any) -> bool:
    """Check whether an object advertises the transform capability.

    Args:
        obj: Any object

    Returns:
        True if obj.is_transform_base() returns a true value
    """
    if isinstance(obj, type):
        return False
    check = getattr(obj, "is_transform_base", None)
    if not callable(check):
        return False
    return bool(check())


def transfer_pending(source: Transform, target: Transform) -> int:
    """Move a transform's unconsumed buffer into another transform.

    Used when switching transforms mid-stream: the chunks the old transform
    has not consumed are fed to the new one in order, and the old buffer is
    emptied. Partial-parse state held inside the old transform is not moved.

    Args:
        source: Transform being retired
        target: Transform taking over the stream

    Returns:
        Number of buffer elements moved
    """
    pending = source.peek_pending()
    if not pending:
        return 0

    source._buffer.clear()
    target.feed(pending)
    _logger.debug(
        "Pending chunks transferred",
        source=type(source).__name__,
        target=type(target).__name__,
        moved=len(pending),
    )
    return len(pending)
