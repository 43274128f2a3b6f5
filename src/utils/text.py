"""
Text utilities shared by the markup engine:
- HTML entity decoding (the five basic entities)
- space normalization (&nbsp; variants, unicode space lookalikes, escaped hard breaks)
- whitespace collapsing for speech-friendly output
"""

from __future__ import annotations

import re

# &nbsp; / &#160; / &#xA0; in any case
_NBSP_ENTITY = re.compile(r"&nbsp;|&#160;|&#xA0;", re.IGNORECASE)
# NBSP, figure space, narrow NBSP
_UNICODE_SPACES = re.compile(r"[\u00a0\u2007\u202f]")
# unescaped backslash before space/tab/CR/LF (markdown hard break); escaped "\\" pairs stay
_ESCAPED_BREAK = re.compile(r"(?<!\\)((?:\\\\)*)\\[ \t\r\n]")
_WS = re.compile(r"\s+")

# &amp; goes last so "&amp;lt;" decodes to "&lt;" and not "<"
ENTITIES = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
)


def normalize_spaces(s: str | None) -> str:
    """
    Collapse entity and unicode space variants and escaped hard breaks into plain spaces.
    Idempotent; returns "" for empty input.
    """
    if not s:
        return ""
    s = _NBSP_ENTITY.sub(" ", s)
    s = _UNICODE_SPACES.sub(" ", s)
    s = _ESCAPED_BREAK.sub(r"\1 ", s)
    return s


def decode_entities(s: str | None) -> str:
    """Decode &lt; &gt; &quot; &#39; and &amp; (in that order)."""
    if not s:
        return ""
    for entity, char in ENTITIES:
        s = s.replace(entity, char)
    return s


def collapse_whitespace(s: str) -> str:
    """Collapse any whitespace run to a single space and strip the ends."""
    return _WS.sub(" ", s).strip()
