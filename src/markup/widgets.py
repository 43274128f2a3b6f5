"""
Builders that turn one matched widget tag into a segment.

Each builder takes the raw tag token and never raises: missing or invalid
attributes fall back to defaults or None.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Literal, cast

from core.logging import logger_markup as logger
from markup.attrs import (
    parse_dimension,
    parse_float_prefix,
    parse_int_prefix,
    read_attr,
    read_first_attr,
    round_half_up,
)
from markup.media import DEFAULT_GIF_ALT, resolve_gif_src
from markup.schemas.segments import (
    ChainLogoSegment,
    GifSegment,
    GoodbyeSegment,
    ImageSegment,
    MediaSegment,
    MusicSegment,
    SvgSegment,
    TextSegment,
)

DEFAULT_KEY_BG = "#222"
DEFAULT_KEY_COLOR = "#ffd700"
DEFAULT_KEY_WIDTH = 200

MUSIC_ACTIONS = ("play", "pause", "toggle")

_MINUTES_SECONDS = re.compile(r"^\d+:\d{1,2}$")
_FALSY_FLAG = re.compile(r"^(false|0|no)$", re.IGNORECASE)

WidgetBuilder = Callable[[str], MediaSegment]


def build_goodbye(token: str) -> GoodbyeSegment:
    return GoodbyeSegment(
        width=parse_dimension(read_first_attr(token, "width", "w")),
        height=parse_dimension(read_first_attr(token, "height", "h")),
        seconds=parse_int_prefix(read_first_attr(token, "seconds", "s")),
    )


def key_nft_svg(bg_color: str, key_color: str, width: int | None = None, height: int | None = None) -> str:
    """
    Inline SVG of a key glyph (ring, shaft, two teeth) on a 200x100 canvas.

    Width defaults to twice the height (or 200), height to half the width.
    """
    if width is None:
        width = height * 2 if height is not None else DEFAULT_KEY_WIDTH
    if height is None:
        height = round_half_up(width / 2)

    shaft = 10
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100" width="{width}" height="{height}"'
        ' preserveAspectRatio="xMidYMid meet"'
        ' style="display:block; background:transparent !important; outline:none !important;'
        ' filter:none !important; box-shadow:none !important;">'
        f'<rect x="0" y="0" width="200" height="100" style="fill:{bg_color} !important; stroke:none !important;" />'
        f'<circle cx="60" cy="50" r="20" style="fill:none !important; stroke:{key_color} !important;'
        f' stroke-width:{shaft} !important; stroke-linecap:butt !important; stroke-linejoin:miter !important;" />'
        f'<rect x="80" y="{50 - shaft // 2}" width="100" height="{shaft}" rx="{shaft // 2}"'
        f' style="fill:{key_color} !important; stroke:none !important;" />'
        '<path d="M145 30 A5 5 0 0 1 150 35 V46 H140 V35 A5 5 0 0 1 145 30 Z"'
        f' style="fill:{key_color} !important; stroke:none !important;" />'
        '<path d="M165 36 A5 5 0 0 1 170 41 V46 H160 V41 A5 5 0 0 1 165 36 Z"'
        f' style="fill:{key_color} !important; stroke:none !important;" />'
        "</svg>"
    )


def build_key_nft(token: str) -> SvgSegment:
    svg = key_nft_svg(
        bg_color=read_attr(token, "bgColor") or DEFAULT_KEY_BG,
        key_color=read_attr(token, "keyColor") or DEFAULT_KEY_COLOR,
        width=parse_dimension(read_attr(token, "width")),
        height=parse_dimension(read_attr(token, "height")),
    )
    return SvgSegment(content=svg)


def build_chain_logo(token: str) -> ChainLogoSegment:
    name = read_first_attr(token, "chainName", "chainname", "name") or ""
    return ChainLogoSegment(
        chain_name=name.strip(),
        size=parse_int_prefix(read_first_attr(token, "size", "width")),
    )


def build_svg(token: str) -> SvgSegment:
    # normalized at render time (markup.svg.prepare_svg)
    return SvgSegment(content=token)


def build_image(token: str) -> ImageSegment:
    return ImageSegment(content=token)


def build_gif(token: str) -> MediaSegment:
    src = resolve_gif_src(read_first_attr(token, "src", "url", "href") or "")
    if not src:
        logger.debug("GIF tag without a usable src; keeping it as text", extra={"token": token[:200]})
        return TextSegment(content=token)
    return GifSegment(
        src=src,
        alt=read_attr(token, "alt") or DEFAULT_GIF_ALT,
        width=parse_dimension(read_first_attr(token, "width", "w")),
        height=parse_dimension(read_first_attr(token, "height", "h")),
    )


def parse_time_to_seconds(value: str | None) -> float | None:
    """``"1:30"`` -> 90, ``"12.5"`` -> 12.5, negatives clamp to 0, garbage -> None."""
    trimmed = (value or "").strip()
    if not trimmed:
        return None
    if _MINUTES_SECONDS.match(trimmed):
        minutes, seconds = trimmed.split(":")
        return float(int(minutes) * 60 + int(seconds))
    f = parse_float_prefix(trimmed)
    return max(0.0, f) if f is not None else None


def build_music(token: str) -> MusicSegment:
    song = (read_attr(token, "song") or "").strip() or None
    ext = read_attr(token, "ext")
    action = (read_attr(token, "action") or "").lower()
    autoplay_attr = read_attr(token, "autoplay")

    if autoplay_attr is not None:
        autoplay = not _FALSY_FLAG.match(autoplay_attr)
    else:
        autoplay = bool(song)

    return MusicSegment(
        song=song,
        ext=ext.removeprefix(".") if ext else None,
        action=cast(Literal["play", "pause", "toggle"], action) if action in MUSIC_ACTIONS else None,
        timeline=parse_time_to_seconds(read_first_attr(token, "timeline", "time", "t")),
        autoplay=autoplay,
    )


# tag kind (named group of the engine's tag pattern) -> builder
WIDGET_BUILDERS: dict[str, WidgetBuilder] = {
    "goodbye": build_goodbye,
    "key_nft": build_key_nft,
    "chain_logo": build_chain_logo,
    "svg": build_svg,
    "img": build_image,
    "gif": build_gif,
    "music": build_music,
}
