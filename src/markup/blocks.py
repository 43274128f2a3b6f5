"""
Heading, link and inline splitting for text that holds no widget tags.
"""

from __future__ import annotations

import re

from markup.inline import parse_inline
from markup.schemas.segments import (
    FormattedTextSegment,
    HeadingSegment,
    LinkSegment,
    MediaSegment,
    TextSegment,
)
from utils.text import normalize_spaces

MAX_HEADING_LEVEL = 4

_LINE_BREAK = re.compile(r"\r?\n")
_HEADING = re.compile(r"^\s{0,3}(#{1,4}) +(.+)$")
_LINK = re.compile(r"\[([^\[\]]+)\]\((https?://[^\s()]+)\)", re.IGNORECASE)


def split_links(line: str) -> list[MediaSegment]:
    """Split one line into ``link`` segments and the ``text`` segments around them."""
    segments: list[MediaSegment] = []
    pos = 0
    for m in _LINK.finditer(line):
        if m.start() > pos:
            segments.append(TextSegment(content=line[pos : m.start()]))
        segments.append(LinkSegment(label=m.group(1), href=m.group(2)))
        pos = m.end()
    if pos < len(line):
        segments.append(TextSegment(content=line[pos:]))
    return segments


def split_block(text: str | None) -> list[MediaSegment]:
    """
    Segment a block of plain text line by line.

    Lines are separated by explicit ``text("\\n")`` segments. A line starting
    with one to four ``#`` and a space is a heading; any other line becomes
    links plus ``formattedText`` segments carrying emphasis runs.
    """
    if not text:
        return []
    lines = _LINE_BREAK.split(normalize_spaces(text))

    output: list[MediaSegment] = []
    for idx, line in enumerate(lines):
        heading = _HEADING.match(line)
        if heading:
            level = min(MAX_HEADING_LEVEL, len(heading.group(1)))
            output.append(HeadingSegment(level=level, inline=parse_inline(heading.group(2))))
        else:
            for seg in split_links(line):
                if isinstance(seg, TextSegment):
                    output.append(FormattedTextSegment(inline=parse_inline(seg.content)))
                else:
                    output.append(seg)
        if idx < len(lines) - 1:
            output.append(TextSegment(content="\n"))
    return output
