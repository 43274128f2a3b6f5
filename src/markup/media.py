"""
GIF/image path resolution and attribute extraction.

GIF sources written by the model are usually bare file names ("party.gif")
that live under the public ``/gifs/`` directory; absolute URLs and rooted
paths are trusted as-is.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from markup.attrs import parse_int_prefix, read_first_attr

GIF_DIR = "gifs/"
DEFAULT_GIF_ALT = "GIF"
DEFAULT_IMAGE_ALT = "Image"

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)
_RELATIVE_HOP = re.compile(r"^\.\.?/")


@dataclass(frozen=True)
class MediaAttrs:
    src: str
    alt: str
    width: int | None = None
    height: int | None = None


def is_absolute_url(value: str | None) -> bool:
    return bool(value) and _ABSOLUTE_URL.match(value) is not None


def resolve_gif_src(value: str | None) -> str:
    """
    Turn a user-supplied GIF path into a servable one.

    >>> resolve_gif_src("x.gif")
    '/gifs/x.gif'
    >>> resolve_gif_src("https://cdn/x.gif")
    'https://cdn/x.gif'
    """
    if not value:
        return ""
    path = value.strip().replace("\\", "/")
    if not path:
        return ""
    if is_absolute_url(path) or path.startswith("/"):
        return path
    # one hop only; no real path resolution
    path = _RELATIVE_HOP.sub("", path, count=1)
    if not path.lower().startswith(GIF_DIR):
        path = GIF_DIR + path
    return "/" + path


def extract_gif_attrs(tag: str) -> MediaAttrs:
    src = read_first_attr(tag, "src", "url", "href") or ""
    return MediaAttrs(
        src=resolve_gif_src(src),
        alt=read_first_attr(tag, "alt") or DEFAULT_GIF_ALT,
        width=parse_int_prefix(read_first_attr(tag, "width")),
        height=parse_int_prefix(read_first_attr(tag, "height")),
    )


def extract_img_attrs(tag: str) -> MediaAttrs:
    """Attributes of a bare ``<img>`` token; the src is left untouched."""
    return MediaAttrs(
        src=read_first_attr(tag, "src") or "",
        alt=read_first_attr(tag, "alt") or DEFAULT_IMAGE_ALT,
        width=parse_int_prefix(read_first_attr(tag, "width")),
        height=parse_int_prefix(read_first_attr(tag, "height")),
    )
