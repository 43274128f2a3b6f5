"""
Request size guard for the Chat Markup service.

Rejects oversized request bodies before FastAPI parses them, based on the
declared Content-Length. The limit is configurable through MAX_REQUEST_SIZE_KB.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from core.logging import logger_markup as logger
from core.settings import get_settings

settings = get_settings()


class RequestSizeGuardMiddleware(BaseHTTPMiddleware):
    """
    Middleware that refuses request bodies larger than the configured limit.

    HTTP Status Codes:
        413 Payload Too Large: Content-Length exceeds MAX_REQUEST_SIZE_KB
    """

    def __init__(self, app: Any, max_request_kb: int | None = None) -> None:
        super().__init__(app)
        self.max_request_kb = max_request_kb if max_request_kb is not None else settings.MAX_REQUEST_SIZE_KB

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit():
            size_kb = int(content_length) / 1024
            if size_kb > self.max_request_kb:
                logger.warning(
                    f"Request body too large: {size_kb:.1f}KB > {self.max_request_kb}KB limit - rejecting request"
                )
                return JSONResponse(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    content={
                        "detail": "Request body too large",
                        "error": "payload_too_large",
                        "size_kb": round(size_kb, 1),
                        "max_size_kb": self.max_request_kb,
                    },
                )

        return await call_next(request)
