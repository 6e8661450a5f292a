"""Tests for control markers."""

import pytest
from pydantic import ValidationError

from data_transform import (
    ControlMarker,
    EndOfStream,
    SendBack,
    StreamError,
    is_marker,
)


class TestControlMarker:
    """Tests for marker construction and payloads."""

    def test_default_payload(self) -> None:
        """Test markers carry no payload by default."""
        assert EndOfStream().data is None

    def test_positional_payload(self) -> None:
        """Test the payload may be passed positionally."""
        assert StreamError("bad line").data == "bad line"

    def test_keyword_payload(self) -> None:
        """Test the payload may be passed by keyword."""
        assert SendBack(data=b"ping").data == b"ping"

    def test_payload_returned_unchanged(self) -> None:
        """Test the payload object is not copied."""
        payload = {"offset": 12, "reason": ["truncated"]}
        marker = StreamError(payload)
        assert marker.data is payload

    def test_kind(self) -> None:
        """Test the variant tag."""
        assert SendBack().kind == "SendBack"
        assert EndOfStream().kind == "EndOfStream"
        assert StreamError().kind == "StreamError"

    def test_markers_are_immutable(self) -> None:
        """Test markers cannot be modified after creation."""
        marker = EndOfStream("x")
        with pytest.raises(ValidationError):
            marker.data = "y"

    def test_equality_depends_on_variant_and_payload(self) -> None:
        """Test equality semantics."""
        assert EndOfStream() == EndOfStream()
        assert StreamError("a") == StreamError("a")
        assert StreamError("a") != StreamError("b")
        assert EndOfStream() != StreamError()
        assert SendBack(1) != EndOfStream(1)

    def test_variants_share_base(self) -> None:
        """Test every variant is a ControlMarker."""
        for variant in (SendBack, EndOfStream, StreamError):
            assert issubclass(variant, ControlMarker)


class TestIsMarker:
    """Tests for is_marker()."""

    def test_markers(self) -> None:
        """Test markers are recognised."""
        assert is_marker(EndOfStream())
        assert is_marker(ControlMarker("raw"))

    def test_chunks(self) -> None:
        """Test ordinary chunks are not markers."""
        assert not is_marker(b"EndOfStream")
        assert not is_marker(None)
        assert not is_marker(EndOfStream)


class TestPayloadArguments:
    """Tests for ambiguous payload arguments."""

    def test_positional_and_keyword_payload_rejected(self) -> None:
        """Test the payload cannot be given twice."""
        with pytest.raises(TypeError):
            SendBack(1, data=2)

    def test_keyword_payload_alone(self) -> None:
        """Test an explicit keyword alone is accepted."""
        assert SendBack(data=None).data is None
