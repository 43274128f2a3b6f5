"""
Pytest configuration and shared fixtures for chat-markup tests.

This file provides:
- Factories for message parts
- Sample streamed messages mixing prose, markdown and widget tags
- Mock settings with small request limits
- A FastAPI test client running the real lifespan
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from markup.schemas.segments import MessagePart


@pytest.fixture
def make_parts() -> Callable[[list[str]], list[MessagePart]]:
    """Factory fixture building text parts from plain strings."""

    def _make(texts: list[str]) -> list[MessagePart]:
        return [MessagePart(text=t) for t in texts]

    return _make


@pytest.fixture
def sample_message() -> str:
    """Return an assistant message using most of the markup the engine knows."""
    return (
        "# Welcome **back**\n"
        "Here is your key: <key-nft bgColor=\"#000\" keyColor=\"#0f0\" width=\"100\" />\n"
        "Read [the docs](https://example.com/docs) and enjoy <gif src=\"party.gif\" width=\"120px\"/>\n"
        "<music song=\"theme\" ext=\".mp3\" t=\"1:05\"/>"
    )


@pytest.fixture
def mock_settings() -> Mock:
    """Return mock settings object."""
    settings = Mock()
    settings.PROJECT_NAME = "Chat Markup Test"
    settings.API_V1_STR = ""
    settings.CORS_ORIGINS = ""
    settings.LOG_LEVEL = "INFO"
    settings.DEBUG = False
    settings.HOST = "127.0.0.1"
    settings.PORT = 5999

    # Markup limits kept small so tests can hit them cheaply
    settings.MARKUP_LOG_NAME = "markup.app"
    settings.MARKUP_MAX_INPUT_CHARS = 500
    settings.MARKUP_MAX_PARTS = 5
    settings.MAX_REQUEST_SIZE_KB = 2048
    return settings


@pytest.fixture
def markup_client(mock_settings: Mock, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """Return FastAPI test client for the markup service."""
    monkeypatch.setattr("markup.app.settings", mock_settings)
    monkeypatch.setattr("markup.api.api_v1.endpoints.messages.settings", mock_settings)

    # Import after patching to ensure the mock is used
    from markup.app import app

    # raise_server_exceptions=False lets us assert on the structured 500 responses
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
