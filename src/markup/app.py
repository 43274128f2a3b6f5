from __future__ import annotations

import importlib.metadata as md
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from core.error_handler import register_exception_handlers
from core.logging import logger_markup as logger
from core.middleware import RequestSizeGuardMiddleware
from core.settings import get_settings
from markup.api.api_v1.api import api_router

# Core Services Settings
settings = get_settings()


@asynccontextmanager
async def app_init(app: FastAPI) -> AsyncIterator[None]:
    """
    Performs initialization tasks for the application during startup.

    Tasks:
        - Loads API routes

    Args:
        app (FastAPI): The FastAPI application instance.

    Yields:
        None: Allows the application to continue initialization.
    """
    logger.info("Initializing web server...")

    app.include_router(api_router, prefix=settings.API_V1_STR)
    logger.info("API routes loaded...")

    yield

    logger.info("Shutting down markup service...")


# Create the FastAPI application instance
projectMetadata = md.metadata("chat-markup")
app = FastAPI(
    title=settings.PROJECT_NAME or projectMetadata["Name"].title().replace("-", " "),
    description=projectMetadata["Summary"],
    version=projectMetadata["Version"],
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    license_info={"name": "MIT License"},
    lifespan=app_init,
)

register_exception_handlers(app)

# Configure CORS (Cross-Origin Resource Sharing) settings
if settings.CORS_ORIGINS:
    cors_origins = [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]
    logger.info(f"Configuring CORS with allowed origins: {cors_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    logger.warning("CORS_ORIGINS is not set. No CORS configuration applied.")

app.add_middleware(RequestSizeGuardMiddleware)
logger.info("Request size guard middleware enabled")


@app.get("/", response_class=RedirectResponse, include_in_schema=False)
async def index() -> Any:
    return "/docs"


@app.get("/health")
@app.get("/healthz")
@app.get("/healthcheck")
async def healthcheck() -> JSONResponse:
    """
    Healthcheck endpoint to verify that the server is running.

    Returns:
        dict: A JSON response with the key "status" and value "ok".
    """
    return JSONResponse({"status": "ok"})


def main() -> None:
    """Serve the app on ``HOST``:``PORT``; reloads on code changes when ``DEBUG`` is set."""
    uvicorn.run(
        "markup.app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
