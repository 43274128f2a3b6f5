"""
Message markup endpoints.

- /segments: raw text -> typed segments
- /messages/split: raw parts + anchor -> before/after parts
- /messages/segments: raw parts + anchor -> before/after segments
- /speakable: raw text or parts -> speech-friendly text and its cache hash
- /svg/prepare: inline SVG -> display-ready SVG
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from fastapi import APIRouter

from core.error_handler import ErrorContext
from core.logging import logger_markup as logger
from core.settings import get_settings
from markup.anchor import segment_message, split_at
from markup.exceptions import EmptyInputError, InputTooLargeError, SegmentationError
from markup.schemas.api import (
    MessageRequest,
    MessageSegmentsResponse,
    SegmentRequest,
    SegmentResponse,
    SpeakableRequest,
    SpeakableResponse,
    SplitResponse,
    SvgRequest,
    SvgResponse,
)
from markup.schemas.segments import MessagePart
from markup.segmenter import segment
from markup.speakable import speakable_from_parts, speakable_hash, to_speakable
from markup.svg import prepare_svg

router = APIRouter()

settings = get_settings()

T = TypeVar("T")


def check_text_limit(text: str, ctx: ErrorContext) -> None:
    if len(text) > settings.MARKUP_MAX_INPUT_CHARS:
        logger.warning("Rejecting oversized message text", extra=ctx.to_log_dict())
        raise InputTooLargeError(
            message="Message text too long",
            details=f"{len(text)} characters > {settings.MARKUP_MAX_INPUT_CHARS} allowed",
            context=ctx.to_dict(),
        )


def check_parts_limit(parts: list[MessagePart], ctx: ErrorContext) -> None:
    if len(parts) > settings.MARKUP_MAX_PARTS:
        logger.warning("Rejecting message with too many parts", extra=ctx.to_log_dict())
        raise InputTooLargeError(
            message="Too many message parts",
            details=f"{len(parts)} parts > {settings.MARKUP_MAX_PARTS} allowed",
            context=ctx.to_dict(),
        )
    check_text_limit("".join(p.text for p in parts), ctx)


def run_engine(ctx: ErrorContext, action: str, fn: Callable[[], T]) -> T:
    """Run an engine call, turning any unexpected exception into a SegmentationError."""
    try:
        return fn()
    except Exception as e:
        ctx.add_custom("action", action)
        logger.error(
            f"{action} failed",
            extra={
                **ctx.to_log_dict(),
                "error_type": type(e).__name__,
                "error_module": type(e).__module__,
            },
            exc_info=True,
        )
        raise SegmentationError(
            message=f"{action} failed",
            details=f"{type(e).__name__}: {str(e)}",
            context=ctx.to_dict(),
            original_exception=e,
        ) from e


@router.post("/segments", response_model=SegmentResponse, response_model_exclude_none=True)
async def create_segments(request: SegmentRequest) -> Any:
    """Segment one raw message text."""
    ctx = ErrorContext.create(endpoint="/segments")
    ctx.add_input_info(text_length=len(request.text))
    check_text_limit(request.text, ctx)

    logger.debug("Segmenting message", extra=ctx.to_log_dict())
    segments = run_engine(ctx, "Segmentation", lambda: segment(request.text))
    return SegmentResponse(segments=segments)


@router.post("/messages/split", response_model=SplitResponse)
async def split_message(request: MessageRequest) -> Any:
    """Split message parts at the tool anchor."""
    ctx = ErrorContext.create(endpoint="/messages/split")
    ctx.add_input_info(part_count=len(request.parts))
    ctx.add_params({"has_anchor": request.anchor is not None})
    check_parts_limit(request.parts, ctx)

    logger.debug("Splitting message at anchor", extra=ctx.to_log_dict())
    result = run_engine(ctx, "Anchor split", lambda: split_at(request.parts, request.anchor))
    return SplitResponse(before=result.before, after=result.after)


@router.post("/messages/segments", response_model=MessageSegmentsResponse, response_model_exclude_none=True)
async def create_message_segments(request: MessageRequest) -> Any:
    """Split message parts at the tool anchor and segment both sides."""
    ctx = ErrorContext.create(endpoint="/messages/segments")
    ctx.add_input_info(part_count=len(request.parts))
    ctx.add_params({"has_anchor": request.anchor is not None})
    check_parts_limit(request.parts, ctx)

    logger.debug("Segmenting anchored message", extra=ctx.to_log_dict())
    before, after = run_engine(ctx, "Segmentation", lambda: segment_message(request.parts, request.anchor))
    return MessageSegmentsResponse(before=before, after=after)


@router.post("/speakable", response_model=SpeakableResponse)
async def create_speakable(request: SpeakableRequest) -> Any:
    """Speech-friendly text for a TTS request, plus the hash used to key cached audio."""
    ctx = ErrorContext.create(endpoint="/speakable")

    if request.text is not None:
        text = request.text
        ctx.add_input_info(text_length=len(text))
        check_text_limit(text, ctx)
        spoken = run_engine(ctx, "Speakable extraction", lambda: to_speakable(text))
    elif request.parts is not None:
        parts = request.parts
        ctx.add_input_info(part_count=len(parts))
        check_parts_limit(parts, ctx)
        spoken = run_engine(ctx, "Speakable extraction", lambda: speakable_from_parts(parts))
    else:
        raise EmptyInputError(context=ctx.to_dict())

    return SpeakableResponse(text=spoken, hash=speakable_hash(spoken))


@router.post("/svg/prepare", response_model=SvgResponse)
async def create_prepared_svg(request: SvgRequest) -> Any:
    ctx = ErrorContext.create(endpoint="/svg/prepare")
    ctx.add_input_info(text_length=len(request.svg))
    check_text_limit(request.svg, ctx)
    return SvgResponse(svg=run_engine(ctx, "SVG preparation", lambda: prepare_svg(request.svg)))
