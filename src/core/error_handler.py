"""
Error handling utilities for the Chat Markup service.

This module provides utilities for consistent error handling across all endpoints:
- ErrorContext: Captures request context for logging and debugging
- Exception handlers: Convert custom exceptions to structured HTTP responses
"""

from __future__ import annotations

import traceback
import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import ChatMarkupError, ProcessingError, ValidationError
from core.settings import get_settings

settings = get_settings()


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ErrorContext:
    """
    Captures request context for error logging and debugging.

    Example:
        ctx = ErrorContext.create(endpoint="/segments")
        ctx.add_input_info(text_length=len(body.text))
        ctx.add_params({"has_anchor": False})

        # Later, when an error occurs:
        logger.error("Segmentation failed", extra=ctx.to_log_dict())
    """

    def __init__(self, request_id: str, endpoint: str) -> None:
        self.request_id = request_id
        self.endpoint = endpoint
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.data: dict[str, Any] = {}

    @classmethod
    def create(cls, request_id: str | None = None, endpoint: str = "") -> ErrorContext:
        """
        Factory method to create an ErrorContext with auto-generated request ID.

        Args:
            request_id: Optional request ID (auto-generated if not provided)
            endpoint: API endpoint being called

        Returns:
            New ErrorContext instance
        """
        return cls(request_id=request_id or new_request_id(), endpoint=endpoint)

    def add_input_info(
        self,
        text_length: int | None = None,
        part_count: int | None = None,
        **kwargs: Any,
    ) -> ErrorContext:
        """
        Add information about the message being processed.

        Args:
            text_length: Length of the raw text in characters
            part_count: Number of message parts in the request
            **kwargs: Additional input-related metadata

        Returns:
            Self for method chaining
        """
        input_info: dict[str, Any] = {}
        if text_length is not None:
            input_info["text_length"] = text_length
        if part_count is not None:
            input_info["part_count"] = part_count

        input_info.update(kwargs)
        self.data["input"] = input_info
        return self

    def add_params(self, params: dict[str, Any]) -> ErrorContext:
        """Add request parameters to the context."""
        self.data["params"] = params
        return self

    def add_custom(self, key: str, value: Any) -> ErrorContext:
        self.data[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_id": self.request_id,
            "endpoint": self.endpoint,
            "timestamp": self.timestamp,
            **self.data,
        }

    def to_log_dict(self) -> dict[str, Any]:
        """
        Convert context to a dictionary suitable for structured logging.

        Nested dictionaries are flattened to ``<key>_<sub_key>`` so log
        processors can index them directly.
        """
        log_dict: dict[str, Any] = {
            "request_id": self.request_id,
            "endpoint": self.endpoint,
            "timestamp": self.timestamp,
        }

        for key, value in self.data.items():
            if isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    log_dict[f"{key}_{sub_key}"] = sub_value
            else:
                log_dict[key] = value

        return log_dict


def build_error_response(
    error: ChatMarkupError,
    status_code: int,
    request_id: str | None = None,
    include_traceback: bool = False,
) -> dict[str, Any]:
    """
    Build a structured error response from a ChatMarkupError.

    Args:
        error: The exception to convert
        status_code: HTTP status code
        request_id: Request ID to include in response
        include_traceback: Whether to include stack trace (only honoured when DEBUG is on)

    Returns:
        Dictionary ready for JSON serialization
    """
    response: dict[str, Any] = {
        "error": error.to_dict(),
        "status_code": status_code,
    }

    if request_id:
        response["request_id"] = request_id

    if include_traceback and settings.DEBUG:
        response["traceback"] = traceback.format_exc()

    return response


def _request_id_for(exc: ChatMarkupError) -> str:
    return exc.context.get("request_id") or new_request_id()


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        """Handle ValidationError exceptions."""
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=build_error_response(exc, status.HTTP_422_UNPROCESSABLE_ENTITY, _request_id_for(exc)),
        )

    @app.exception_handler(ProcessingError)
    async def processing_error_handler(request: Request, exc: ProcessingError) -> JSONResponse:
        """Handle ProcessingError exceptions."""
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=build_error_response(
                exc, status.HTTP_500_INTERNAL_SERVER_ERROR, _request_id_for(exc), include_traceback=True
            ),
        )

    @app.exception_handler(ChatMarkupError)
    async def chat_markup_error_handler(request: Request, exc: ChatMarkupError) -> JSONResponse:
        """Handle generic ChatMarkupError exceptions (fallback)."""
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=build_error_response(
                exc, status.HTTP_500_INTERNAL_SERVER_ERROR, _request_id_for(exc), include_traceback=True
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Handle FastAPI request validation errors."""
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": {
                    "error_code": "REQUEST_VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": jsonable_errors(exc),
                },
                "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY,
                "request_id": new_request_id(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle standard HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "error_code": f"HTTP_{exc.status_code}",
                    "message": exc.detail,
                },
                "status_code": exc.status_code,
                "request_id": new_request_id(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle any unhandled exceptions (last resort)."""
        error_response: dict[str, Any] = {
            "error": {
                "error_code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
                "details": f"{type(exc).__name__}: {exc}",
            },
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "request_id": new_request_id(),
        }

        if settings.DEBUG:
            error_response["traceback"] = traceback.format_exc()

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response,
        )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Validation errors with the non-serializable ``ctx``/``input`` values stringified."""
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        if "input" in err and not isinstance(err["input"], (str, int, float, bool, type(None), list, dict)):
            err["input"] = str(err["input"])
        errors.append(err)
    return errors
