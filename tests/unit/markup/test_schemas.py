"""Unit tests for markup.schemas module."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from markup.schemas.api import MessageRequest, SpeakableRequest
from markup.schemas.segments import (
    ChainLogoSegment,
    GifSegment,
    HeadingSegment,
    MediaSegment,
    MessagePart,
    MusicSegment,
    ToolAnchor,
)

segments_adapter = TypeAdapter(list[MediaSegment])


@pytest.mark.unit
@pytest.mark.markup
class TestSegmentModels:
    """Tests for the segment data model."""

    def test_camel_case_json(self) -> None:
        """Test JSON output uses camelCase names."""
        dumped = ChainLogoSegment(chain_name="eth", size=20).model_dump(by_alias=True)
        assert dumped == {"type": "chainLogo", "chainName": "eth", "size": 20}

    def test_populate_by_alias_or_name(self) -> None:
        """Test both camelCase and snake_case input are accepted."""
        assert ToolAnchor.model_validate({"partIndex": 1, "charOffset": 2}) == ToolAnchor(part_index=1, char_offset=2)

    def test_frozen(self) -> None:
        """Test segments are immutable."""
        seg = GifSegment(src="/gifs/a.gif")
        with pytest.raises(ValidationError):
            seg.src = "/other.gif"  # type: ignore[misc]

    def test_heading_level_bounds(self) -> None:
        """Test heading levels outside 1-4 are rejected."""
        with pytest.raises(ValidationError):
            HeadingSegment(level=5)
        with pytest.raises(ValidationError):
            HeadingSegment(level=0)

    def test_negative_timeline_rejected(self) -> None:
        """Test a negative seek position is rejected."""
        with pytest.raises(ValidationError):
            MusicSegment(timeline=-1)

    def test_discriminated_union(self) -> None:
        """Test segments validate into the class named by their type."""
        segs = segments_adapter.validate_python(
            [
                {"type": "gif", "src": "/gifs/a.gif", "width": 10},
                {"type": "chainLogo", "chainName": "base"},
                {"type": "text", "content": "\n"},
            ]
        )
        assert [type(s).__name__ for s in segs] == ["GifSegment", "ChainLogoSegment", "TextSegment"]

    def test_unknown_type_rejected(self) -> None:
        """Test an unknown segment type fails validation."""
        with pytest.raises(ValidationError):
            segments_adapter.validate_python([{"type": "video", "src": "x"}])

    def test_json_round_trip(self, sample_message: str) -> None:
        """Test engine output survives a JSON round trip."""
        from markup.segmenter import segment

        segs = segment(sample_message)
        payload = segments_adapter.dump_json(segs, by_alias=True)
        assert segments_adapter.validate_json(payload) == segs


@pytest.mark.unit
@pytest.mark.markup
class TestRequestModels:
    """Tests for API request models."""

    def test_message_request_defaults(self) -> None:
        """Test parts default to text parts and the anchor is optional."""
        req = MessageRequest.model_validate({"parts": [{"text": "a"}]})
        assert req.parts == [MessagePart(text="a")]
        assert req.anchor is None

    def test_message_request_anchor(self) -> None:
        """Test the anchor is read from camelCase JSON."""
        req = MessageRequest.model_validate({"parts": [], "anchor": {"partIndex": 0, "charOffset": 3}})
        assert req.anchor == ToolAnchor(part_index=0, char_offset=3)

    def test_speakable_request_fields_optional(self) -> None:
        """Test both text and parts may be omitted at the model level."""
        req = SpeakableRequest()
        assert req.text is None
        assert req.parts is None
