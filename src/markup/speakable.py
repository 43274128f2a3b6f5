"""
Speech-friendly text from a chat message.

Only textual segments are spoken; widgets (images, GIFs, SVG, music commands,
countdowns, chain logos) are dropped.
"""

from __future__ import annotations

from collections.abc import Sequence

from markup.anchor import join_parts
from markup.schemas.segments import (
    FormattedTextSegment,
    HeadingSegment,
    LinkSegment,
    MediaSegment,
    MessagePart,
    TextSegment,
)
from markup.segmenter import segment
from utils.text import collapse_whitespace, normalize_spaces

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


def spoken_text(seg: MediaSegment) -> str | None:
    """Plain-text projection of a segment, or None when it has nothing to say."""
    if isinstance(seg, TextSegment):
        return seg.content
    if isinstance(seg, (FormattedTextSegment, HeadingSegment)):
        return "".join(run.content for run in seg.inline)
    if isinstance(seg, LinkSegment):
        return seg.label
    return None


def to_speakable(raw_text: str | None) -> str:
    if not raw_text:
        return ""
    pieces = [text for text in map(spoken_text, segment(raw_text)) if text is not None]
    return collapse_whitespace(normalize_spaces(" ".join(pieces)))


def speakable_from_parts(parts: Sequence[MessagePart]) -> str:
    return to_speakable(join_parts(parts))


def speakable_hash(text: str) -> str:
    """
    32-bit FNV-1a over the UTF-16 code units of ``text``, as lowercase hex.

    Matches the hash the chat client uses to key cached TTS audio.
    """
    h = _FNV_OFFSET
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    return format(h, "x")
