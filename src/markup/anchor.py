"""
Splitting a message's raw parts at a tool anchor.

The renderer shows ``before``, then the anchored widget (e.g. a tool-call
chip), then ``after``. Out-of-range anchors are clamped, never rejected.
"""

from __future__ import annotations

from collections.abc import Sequence

from markup.schemas.segments import MediaSegment, MessagePart, SplitResult, ToolAnchor
from markup.segmenter import segment

PART_SEPARATOR = "\n"


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def cut_utf16(text: str, offset: int) -> tuple[str, str]:
    """
    Cut ``text`` after ``offset`` UTF-16 code units, the unit the chat client counts in.

    A cut that would land inside a surrogate pair moves before the pair.
    """
    units = 0
    for i, char in enumerate(text):
        units += 2 if ord(char) > 0xFFFF else 1
        if units > offset:
            return text[:i], text[i:]
    return text, ""


def split_at(parts: Sequence[MessagePart], anchor: ToolAnchor | None = None) -> SplitResult:
    """
    Split ``parts`` at ``anchor.part_index`` / ``anchor.char_offset``.

    Parts before the target go to ``before`` unchanged, parts after it go to
    ``after`` unchanged; the target itself is cut in two and each non-empty
    half becomes a new part. ``char_offset`` counts UTF-16 code units.
    """
    if anchor is None or not parts:
        return SplitResult(before=list(parts), after=[])

    index = _clamp(anchor.part_index, 0, len(parts) - 1)
    target = parts[index]
    text = target.text if isinstance(target.text, str) else str(target.text)
    offset = _clamp(anchor.char_offset, 0, utf16_length(text))

    before = list(parts[:index])
    after: list[MessagePart] = []
    head, tail = cut_utf16(text, offset)
    if head:
        before.append(MessagePart(text=head))
    if tail:
        after.append(MessagePart(text=tail))
    after.extend(parts[index + 1 :])

    return SplitResult(before=before, after=after)


def join_parts(parts: Sequence[MessagePart], separator: str = PART_SEPARATOR) -> str:
    return separator.join(p.text if isinstance(p.text, str) else str(p.text) for p in parts)


def segment_message(
    parts: Sequence[MessagePart], anchor: ToolAnchor | None = None
) -> tuple[list[MediaSegment], list[MediaSegment]]:
    """Segments to render before and after the anchored widget."""
    split = split_at(parts, anchor)
    before = segment(join_parts(split.before))
    after = segment(join_parts(split.after)) if split.after else []
    return before, after
