"""
Attribute reading and numeric coercion for widget tags.

Widget tags come from a language model, so quoting and spacing vary:
``width="10"``, ``width='10'``, ``width=10`` and ``WIDTH = "10px"`` are all
accepted. Numbers follow JavaScript's parseInt/parseFloat prefix rules:
leading digits count, the rest is ignored, no digits means no value.
"""

from __future__ import annotations

import math
import re
from functools import lru_cache

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_PX_SUFFIX = re.compile(r"px$", re.IGNORECASE)


@lru_cache(maxsize=64)
def _attr_pattern(key: str) -> re.Pattern[str]:
    # the key must start an attribute name: "h" never matches inside "width="
    return re.compile(
        rf"(?<![\w-]){re.escape(key)}\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|([^\s>]+))",
        re.IGNORECASE,
    )


def read_attr(token: str, key: str) -> str | None:
    """Value of ``key`` in a tag-like token, or None when the attribute is absent."""
    m = _attr_pattern(key).search(token)
    if m is None:
        return None
    return next((g for g in m.groups() if g is not None), None)


def read_first_attr(token: str, *keys: str) -> str | None:
    """First present attribute among ``keys`` (aliases in priority order)."""
    for key in keys:
        value = read_attr(token, key)
        if value is not None:
            return value
    return None


def strip_px(value: str) -> str:
    return _PX_SUFFIX.sub("", value)


def parse_int_prefix(value: str | None) -> int | None:
    """``"12px"`` -> 12, ``"1.9"`` -> 1, ``"abc"`` -> None."""
    if not value:
        return None
    m = _INT_PREFIX.match(value)
    return int(m.group(1)) if m else None


def parse_float_prefix(value: str | None) -> float | None:
    if not value:
        return None
    m = _FLOAT_PREFIX.match(value)
    if not m:
        return None
    f = float(m.group(1))
    return f if math.isfinite(f) else None


def parse_dimension(value: str | None) -> int | None:
    """Pixel dimension such as ``"120"`` or ``"120px"``."""
    if not value:
        return None
    return parse_int_prefix(strip_px(value))


def round_half_up(x: float) -> int:
    """Round like JavaScript's Math.round (halves go up, not to even)."""
    return math.floor(x + 0.5)
