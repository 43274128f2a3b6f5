"""
Pytest configuration and shared fixtures for integration tests.

This file provides:
- An integration client running the real FastAPI app lifespan with real settings
- Streaming helpers that replay a message the way a chat client receives it
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def markup_integration_client() -> Iterator[TestClient]:
    """Return a test client whose app went through its real lifespan startup."""
    from markup.app import app

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.fixture
def stream_prefixes() -> Callable[[str, int], list[str]]:
    """Factory returning the growing buffers a streamed message passes through."""

    def _prefixes(text: str, step: int = 7) -> list[str]:
        cuts = list(range(step, len(text), step)) + [len(text)]
        return [text[:cut] for cut in cuts]

    return _prefixes
