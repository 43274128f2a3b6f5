"""
Segmentation engine: raw chat message text -> ordered list of typed segments.

Pipeline:
  1. decode the basic HTML entities
  2. normalize space variants
  3. drop ``` code-fence delimiters (optionally tagged svg/xml/html)
  4. unwrap `backtick-quoted` widget tags
  5. rewrite Markdown images ![alt](url) to <img src="url" alt="alt" />
  6. scan for widget tags with a cursor; text between tags goes to
     ``markup.blocks.split_block``, each tag to its builder in ``markup.widgets``

The whole buffer is re-parsed on every call; there is no incremental mode.
Malformed markup never raises, it degrades to defaults or literal text.
"""

from __future__ import annotations

import re

from markup.blocks import split_block
from markup.schemas.segments import MediaSegment
from markup.widgets import WIDGET_BUILDERS
from utils.text import decode_entities, normalize_spaces

_TAGGED_FENCE = re.compile(r"```(?:svg|xml|html)?\n?", re.IGNORECASE)
_BARE_FENCE = re.compile(r"```\n?")
# a candidate stops at the next backtick, so every backtick starts at most one bounded attempt
_BACKTICKED_TAG = re.compile(r"`(<(?:svg|img|music|gif|goodbye)[^`]*(?:</svg>|/?>))`", re.IGNORECASE)
_MD_IMAGE = re.compile(r"!\[([^\[\]]*)\]\(([^()]+)\)")

# Alternatives are tried in this order at each position; group names key WIDGET_BUILDERS.
# Attribute runs stop at the next "<" so an unclosed opener never scans past the following tag.
TAG_PATTERN = re.compile(
    r"(?P<goodbye><goodbye[^<>]*/?>)"
    r"|(?P<key_nft><key-nft\s+[^<>]*?/>)"
    r"|(?P<chain_logo><chain-logo\s+[^<>]*?/>)"
    r"|(?P<svg><svg[^<>]*>)"
    r"|(?P<img><img[^<>]*/?>)"
    r"|(?P<gif><gif[^<>]*/?>)"
    r"|(?P<music><music[^<>]*/?>)",
    re.IGNORECASE,
)
_SVG_CLOSE = re.compile(r"</svg>", re.IGNORECASE)


def preprocess(raw_text: str | None) -> str:
    """Steps 1-5 of the pipeline: the cleaned text the tag scanner runs on."""
    text = normalize_spaces(decode_entities(raw_text or ""))
    text = _TAGGED_FENCE.sub("", text)
    text = _BARE_FENCE.sub("", text)
    text = _BACKTICKED_TAG.sub(r"\1", text)
    text = _MD_IMAGE.sub(r'<img src="\2" alt="\1" />', text)
    return text


class _SvgCloser:
    """
    First ``</svg>`` at or after a position; searches only move forward.

    Openers are visited left to right, so a closer found for one opener is
    reused by every later opener that sits before it.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.match: re.Match[str] | None = None
        self.exhausted = False

    def after(self, pos: int) -> re.Match[str] | None:
        if self.exhausted:
            return None
        if self.match is None or self.match.start() < pos:
            self.match = _SVG_CLOSE.search(self.text, pos)
            self.exhausted = self.match is None
        return self.match


def segment(raw_text: str | None) -> list[MediaSegment]:
    """
    Parse a (possibly partial) chat message into renderable segments.

    Runs in time linear in the buffer length.

    >>> [s.type for s in segment("# Hi\\n<gif src='x.gif'/>")]
    ['heading', 'text', 'gif']
    """
    text = preprocess(raw_text)
    segments: list[MediaSegment] = []
    closer = _SvgCloser(text)

    pos = 0
    scan = 0
    while True:
        match = TAG_PATTERN.search(text, scan)
        if match is None:
            break
        kind = match.lastgroup
        end = match.end()
        if kind == "svg":
            # a block up to the first closer wins over a self-closing opener
            close = closer.after(end)
            if close is not None:
                end = close.end()
            elif not match.group(0).endswith("/>"):
                # unclosed (still streaming): leave it to the surrounding text
                scan = match.start() + 1
                continue

        if match.start() > pos:
            segments.extend(split_block(text[pos : match.start()]))
        token = text[match.start() : end]
        builder = WIDGET_BUILDERS.get(kind) if kind else None
        if builder is not None:
            segments.append(builder(token))
        else:
            segments.extend(split_block(token))
        pos = scan = end

    if pos < len(text):
        segments.extend(split_block(text[pos:]))

    if not segments:
        segments.extend(split_block(text))

    return segments
