"""Integration test fixtures.

Provides a fully wired AppState around a real DocsClient whose httpx client
is intercepted by respx in the tests, plus a baseline environment for
subprocess-based MCP exchanges.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest

from markdocs.docs_client import DocsClient
from markdocs.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from markdocs.config import Settings

DOCS_API = "https://docs.googleapis.com"


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Forces stdio transport and points the Docs API at an unroutable address so
    no test can reach Google even if a handler gets past validation.
    """
    env = os.environ.copy()
    env["MARKDOCS__SERVER__TRANSPORT"] = "stdio"
    env["MARKDOCS__DOCS__API_BASE_URL"] = "http://127.0.0.1:1"
    env["MARKDOCS__DOCS__ACCESS_TOKEN"] = ""
    env["MARKDOCS__LOGGING__LEVEL"] = "WARNING"
    return env


@pytest.fixture()
async def app_state(settings: Settings) -> AsyncIterator[AppState]:
    """AppState wired with a real DocsClient over a fresh httpx client."""
    async with httpx.AsyncClient() as client:
        yield AppState(
            settings=settings,
            http_client=client,
            docs_client=DocsClient(client, base_url=DOCS_API),
        )
