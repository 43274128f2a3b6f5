from __future__ import annotations

from pydantic import Field

from markup.schemas.segments import MarkupModel, MediaSegment, MessagePart, ToolAnchor


class SegmentRequest(MarkupModel):
    text: str = Field(..., description="Raw message text, possibly partial while streaming")


class SegmentResponse(MarkupModel):
    segments: list[MediaSegment]


class MessageRequest(MarkupModel):
    parts: list[MessagePart] = Field(..., description="Raw message parts in display order")
    anchor: ToolAnchor | None = Field(default=None, description="Where the tool widget is spliced in")


class SplitResponse(MarkupModel):
    before: list[MessagePart]
    after: list[MessagePart]


class MessageSegmentsResponse(MarkupModel):
    before: list[MediaSegment]
    after: list[MediaSegment]


class SpeakableRequest(MarkupModel):
    text: str | None = Field(default=None, description="Raw message text")
    parts: list[MessagePart] | None = Field(default=None, description="Raw message parts, joined with newlines")


class SpeakableResponse(MarkupModel):
    text: str
    hash: str = Field(..., description="FNV-1a hash of the speakable text (cache key for TTS audio)")


class SvgRequest(MarkupModel):
    svg: str


class SvgResponse(MarkupModel):
    svg: str
