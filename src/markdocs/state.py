"""Application state container.

AppState is created once at server startup (inside the FastMCP lifespan context
manager) and injected into every tool handler via the MCP Context object.
Conversions themselves hold no shared state; only the HTTP client and the
Docs API client live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from markdocs.config import Settings
    from markdocs.protocols import DocsClientProtocol


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    http_client: httpx.AsyncClient | None = None
    docs_client: DocsClientProtocol | None = None
