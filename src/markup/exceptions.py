"""
Markup service exception classes.

The engine functions never raise for malformed markup; these exceptions guard
the HTTP surface (request limits) and wrap unexpected failures.
"""

from __future__ import annotations

from typing import Any

from core.exceptions import ProcessingError, ValidationError


class InputTooLargeError(ValidationError):
    """
    Raised when a request carries more text or more parts than configured.

    Maps to HTTP 422 (Unprocessable Entity)
    """

    def __init__(
        self,
        message: str = "Message input too large",
        details: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="INPUT_TOO_LARGE",
            details=details,
            context=context,
            original_exception=original_exception,
        )


class EmptyInputError(ValidationError):
    """
    Raised when a request provides neither text nor parts.

    Maps to HTTP 422 (Unprocessable Entity)
    """

    def __init__(
        self,
        message: str = "Provide either text or parts",
        details: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="EMPTY_INPUT",
            details=details,
            context=context,
            original_exception=original_exception,
        )


class SegmentationError(ProcessingError):
    """
    Raised when an unexpected exception escapes the engine inside an endpoint.

    Maps to HTTP 500 (Internal Server Error)
    """

    def __init__(
        self,
        message: str = "Message segmentation failed",
        details: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="SEGMENTATION_ERROR",
            details=details,
            context=context,
            original_exception=original_exception,
        )
