"""
Core exception classes for the Chat Markup service.

The markup engine itself never raises for malformed input; these exceptions
belong to the service layer around it (request limits, unexpected failures)
and carry enough context to produce structured error responses and logs.
"""

from __future__ import annotations

import re
from typing import Any


class ChatMarkupError(Exception):
    """
    Base exception class for all Chat Markup errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for categorization
        details: Additional error details (e.g., original exception message)
        context: Dictionary containing request context (input sizes, params, etc.)
        original_exception: The original exception that was wrapped, if any
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: str | None = None,
        context: dict[str, Any] | None = None,
        original_exception: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._default_error_code()
        self.details = details
        self.context = context or {}
        self.original_exception = original_exception

    def _default_error_code(self) -> str:
        """Generate default error code from class name ("InputTooLargeError" -> "INPUT_TOO_LARGE_ERROR")."""
        return re.sub(r"(?<!^)(?=[A-Z])", "_", self.__class__.__name__).upper()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the error
        """
        error_dict: dict[str, Any] = {
            "error_code": self.error_code,
            "message": self.message,
        }

        if self.details:
            error_dict["details"] = self.details

        if self.context:
            error_dict["context"] = self.context

        if self.original_exception:
            error_dict["original_exception"] = {
                "type": type(self.original_exception).__name__,
                "module": type(self.original_exception).__module__,
                "message": str(self.original_exception),
            }

        return error_dict


class ValidationError(ChatMarkupError):
    """
    Exception raised when a request is rejected before reaching the engine.

    Maps to HTTP 422. Examples: text over the configured size limit, empty request.
    """


class ProcessingError(ChatMarkupError):
    """
    Exception raised when processing fails unexpectedly.

    Maps to HTTP 500.
    """
