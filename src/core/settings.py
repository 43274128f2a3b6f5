from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central application configuration.

    All values can be overridden via environment variables (or a .env file at project root).
    """

    # General project information
    PROJECT_NAME: str = "Chat Markup"

    # API versioning
    API_V1_STR: str = ""

    # -------------------
    # App / HTTP server
    # -------------------
    ENV: str = Field(default="dev", description="Environment name (dev|staging|prod)")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    DEBUG: bool = Field(default=False, description="Include tracebacks in error responses")
    HOST: str = Field(default="0.0.0.0", description="Bind address")
    PORT: int = Field(default=5003)

    # CORS
    CORS_ORIGINS: str = Field(default="", description="Comma-separated origins")

    # ----------------
    # Markup settings
    # ----------------
    MARKUP_LOG_NAME: str = Field(default="markup.app", description="Python Logger name for the Markup Service.")
    MARKUP_MAX_INPUT_CHARS: int = Field(
        default=200_000, description="Longest message text (in characters) accepted by the HTTP endpoints"
    )
    MARKUP_MAX_PARTS: int = Field(default=1_000, description="Most message parts accepted in a single request")

    # Request guard
    MAX_REQUEST_SIZE_KB: int = Field(default=2048, description="Reject request bodies larger than this (KB)")

    # -------------
    # Pydantic cfg
    # -------------
    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(__file__), "../../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Cached accessor so we don't parse .env multiple times.
    """
    return Settings()
