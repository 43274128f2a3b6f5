"""
Helpers that make inline SVG display-friendly.

Every step inspects and edits only the root ``<svg ...>`` opening tag and is
idempotent, so ``prepare_svg`` can run on already-prepared markup.
The output is NOT sanitized; untrusted SVG must be cleaned by the renderer.
"""

from __future__ import annotations

import re

from markup.attrs import parse_float_prefix, round_half_up

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
DEFAULT_ASPECT = "xMidYMid meet"
DEFAULT_SIZE = 300

_ROOT_TAG = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_HAS_XMLNS = re.compile(r"\sxmlns\s*=")
_HAS_ASPECT = re.compile(r"\spreserveAspectRatio\s*=", re.IGNORECASE)
_HAS_VIEWBOX = re.compile(r"\sviewBox\s*=", re.IGNORECASE)
_HAS_WIDTH = re.compile(r"(?<![\w-])width\s*=", re.IGNORECASE)
_HAS_HEIGHT = re.compile(r"(?<![\w-])height\s*=", re.IGNORECASE)
_WIDTH_VALUE = re.compile(r"(?<![\w-])width\s*=\s*[\"']?(\d+(?:\.\d+)?)", re.IGNORECASE)
_HEIGHT_VALUE = re.compile(r"(?<![\w-])height\s*=\s*[\"']?(\d+(?:\.\d+)?)", re.IGNORECASE)
_VIEWBOX_VALUE = re.compile(
    r"viewBox\s*=\s*[\"']\s*([0-9.]+)\s+([0-9.]+)\s+([0-9.]+)\s+([0-9.]+)\s*[\"']",
    re.IGNORECASE,
)


def _root_tag(svg: str) -> re.Match[str] | None:
    return _ROOT_TAG.search(svg)


def _insert_attrs(svg: str, root: re.Match[str], attrs: str) -> str:
    # right after "<svg"
    at = root.start() + len("<svg")
    return svg[:at] + " " + attrs + svg[at:]


def ensure_xmlns(svg: str) -> str:
    root = _root_tag(svg)
    if root is None or _HAS_XMLNS.search(root.group(0)):
        return svg
    return _insert_attrs(svg, root, f'xmlns="{SVG_NAMESPACE}"')


def ensure_preserve_aspect_ratio(svg: str) -> str:
    root = _root_tag(svg)
    if root is None or _HAS_ASPECT.search(root.group(0)):
        return svg
    return _insert_attrs(svg, root, f'preserveAspectRatio="{DEFAULT_ASPECT}"')


def ensure_viewbox_from_wh(svg: str) -> str:
    """Synthesize ``viewBox="0 0 W H"`` when the root has numeric width and height but no viewBox."""
    root = _root_tag(svg)
    if root is None:
        return svg
    tag = root.group(0)
    if _HAS_VIEWBOX.search(tag):
        return svg
    w = _WIDTH_VALUE.search(tag)
    h = _HEIGHT_VALUE.search(tag)
    if w is None or h is None:
        return svg
    return _insert_attrs(svg, root, f'viewBox="0 0 {w.group(1)} {h.group(1)}"')


def ensure_default_size(svg: str) -> str:
    """
    Give the SVG explicit dimensions so layout can't collapse it.

    Only applies when BOTH width and height are missing:
      - with a viewBox: width=300 and height from the viewBox aspect ratio
      - without one: 300x300
    """
    root = _root_tag(svg)
    if root is None:
        return svg
    tag = root.group(0)
    if _HAS_WIDTH.search(tag) or _HAS_HEIGHT.search(tag):
        return svg

    width = height = DEFAULT_SIZE
    vb = _VIEWBOX_VALUE.search(tag)
    if vb:
        vb_w = parse_float_prefix(vb.group(3))
        vb_h = parse_float_prefix(vb.group(4))
        if vb_w and vb_h and vb_w > 0 and vb_h > 0:
            height = round_half_up(width * (vb_h / vb_w))

    return _insert_attrs(svg, root, f'width="{width}" height="{height}"')


def prepare_svg(svg: str | None) -> str:
    """
    xmlns, preserveAspectRatio, default size, then viewBox from the size.

    Sizing runs before the viewBox synthesis so that a second pass finds
    nothing left to add.
    """
    out = svg or ""
    out = ensure_xmlns(out)
    out = ensure_preserve_aspect_ratio(out)
    out = ensure_default_size(out)
    out = ensure_viewbox_from_wh(out)
    return out
