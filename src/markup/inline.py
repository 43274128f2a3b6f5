"""
Inline emphasis parser for **bold** / __bold__ and *italic* / _italic_.

A small greedy scanner, not a CommonMark implementation: no nesting, and the
content of an emphasis span is taken verbatim up to the matching closer.
Links are handled by ``markup.blocks``.
"""

from __future__ import annotations

import re

from markup.schemas.segments import InlineRun
from utils.text import normalize_spaces

BOLD_MARKERS = ("**", "__")
ITALIC_MARKERS = ("*", "_")
_NEXT_MARKER = re.compile(r"\*\*|__|\*|_")

# \* \_ \# \\ -> literal characters, applied in this order
_ESCAPES = (
    ("\\*", "*"),
    ("\\_", "_"),
    ("\\#", "#"),
    ("\\\\", "\\"),
)


def unescape_markers(s: str) -> str:
    for escaped, char in _ESCAPES:
        s = s.replace(escaped, char)
    return s


def parse_inline(raw: str | None) -> list[InlineRun]:
    """
    Split ``raw`` into text/strong/em runs.

    Escapes are resolved before scanning, so ``\\*word\\*`` ends up emphasized.
    A marker without a closer is kept as a literal text run of its own.
    """
    if not raw:
        return []
    s = unescape_markers(normalize_spaces(raw))

    runs: list[InlineRun] = []

    def push(kind: str, content: str) -> None:
        if content:
            runs.append(InlineRun(type=kind, content=content))

    i = 0
    while i < len(s):
        marker = next((m for m in BOLD_MARKERS if s.startswith(m, i)), None)
        kind = "strong"
        if marker is None:
            marker = next((m for m in ITALIC_MARKERS if s.startswith(m, i)), None)
            kind = "em"

        if marker is not None:
            start = i + len(marker)
            end = s.find(marker, start)
            if end == -1:
                push("text", marker)
                i = start
            else:
                push(kind, s[start:end])
                i = end + len(marker)
            continue

        nxt = _NEXT_MARKER.search(s, i)
        if nxt is None:
            push("text", s[i:])
            break
        push("text", s[i : nxt.start()])
        i = nxt.start()

    return runs
