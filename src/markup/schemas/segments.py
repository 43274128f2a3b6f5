"""
Data model of the markup engine.

Segments form a closed union discriminated by ``type``. Python attributes are
snake_case; the JSON form uses the camelCase names the chat renderer expects
(``formattedText``, ``chainName``, ``partIndex`` ...). Every model is frozen.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MarkupModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class MessagePart(MarkupModel):
    """One raw, unparsed chunk of a message. Parts are displayed in list order."""

    type: Literal["text"] = "text"
    text: str = ""


class ToolAnchor(MarkupModel):
    """Position inside a message's parts where an inline widget gets spliced in."""

    part_index: int
    char_offset: int


class SplitResult(MarkupModel):
    before: list[MessagePart] = Field(default_factory=list)
    after: list[MessagePart] = Field(default_factory=list)


class InlineRun(MarkupModel):
    type: Literal["text", "strong", "em"]
    content: str


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


class TextSegment(MarkupModel):
    """Plain text without inline styling (line separators, degraded tags)."""

    type: Literal["text"] = "text"
    content: str


class FormattedTextSegment(MarkupModel):
    type: Literal["formattedText"] = "formattedText"
    inline: list[InlineRun] = Field(default_factory=list)


class HeadingSegment(MarkupModel):
    type: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=4)
    inline: list[InlineRun] = Field(default_factory=list)


class LinkSegment(MarkupModel):
    type: Literal["link"] = "link"
    label: str
    href: str


class SvgSegment(MarkupModel):
    type: Literal["svg"] = "svg"
    content: str


class ImageSegment(MarkupModel):
    """Raw ``<img .../>`` token; the renderer extracts its attributes."""

    type: Literal["image"] = "image"
    content: str


class GifSegment(MarkupModel):
    type: Literal["gif"] = "gif"
    src: str
    alt: str | None = None
    width: int | None = None
    height: int | None = None


class ChainLogoSegment(MarkupModel):
    """Chain icon placeholder; resolving ``chain_name`` to an asset is the renderer's job."""

    type: Literal["chainLogo"] = "chainLogo"
    chain_name: str = ""
    size: int | None = None


class MusicSegment(MarkupModel):
    type: Literal["music"] = "music"
    song: str | None = None
    ext: str | None = None
    action: Literal["play", "pause", "toggle"] | None = None
    timeline: float | None = Field(default=None, ge=0, description="Seek position in seconds")
    autoplay: bool | None = None


class GoodbyeSegment(MarkupModel):
    type: Literal["goodbye"] = "goodbye"
    width: int | None = None
    height: int | None = None
    seconds: int | None = None


MediaSegment = Annotated[
    Union[
        TextSegment,
        FormattedTextSegment,
        HeadingSegment,
        LinkSegment,
        SvgSegment,
        ImageSegment,
        GifSegment,
        ChainLogoSegment,
        MusicSegment,
        GoodbyeSegment,
    ],
    Field(discriminator="type"),
]
