"""
Control markers that travel through a transform's buffer.

Markers are fed alongside ordinary chunks but are never parsed: take_one()
returns them as-is, in arrival order. Each variant wraps an optional
payload and carries no behaviour; the variant itself is the signal.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ControlMarker(BaseModel):
    """Base class for out-of-band control values.

    Subclass it to add a new variant; transforms pass every subclass
    through untouched.

    Example:
        >>> marker = StreamError("unterminated line")
        >>> marker.data
        'unterminated line'
        >>> marker.kind
        'StreamError'
    """

    model_config = ConfigDict(frozen=True)

    data: Any = Field(default=None, description="Optional payload")

    def __init__(self, data: Any = None, /, **kwargs: Any) -> None:
        if data is not None:
            if "data" in kwargs:
                raise TypeError(
                    f"{type(self).__name__} got the payload both positionally and as data="
                )
            kwargs["data"] = data
        super().__init__(**kwargs)

    @property
    def kind(self) -> str:
        """Variant tag."""
        return type(self).__name__


class SendBack(ControlMarker):
    """Ask the consumer to route the payload back to where the stream came from."""


class EndOfStream(ControlMarker):
    """No further chunks will arrive on this logical stream."""


class StreamError(ControlMarker):
    """A parse failure upstream; the payload describes it."""


def is_marker(value: Any) -> bool:
    """Check whether a buffer element is a control marker."""
    return isinstance(value, ControlMarker)
