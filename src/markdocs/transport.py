"""HTTP mode: one Starlette app serving the MCP endpoint and the REST API.

``/mcp`` is FastMCP's Streamable HTTP endpoint; the REST routes live in
markdocs.http_api. Both sit behind DocsGatewayMiddleware.
"""

from __future__ import annotations

import re
import secrets
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.applications import Starlette
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.routing import Mount

from markdocs import http_api
from markdocs.docs_client import DocsClient, build_http_client
from markdocs.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from mcp.server.fastmcp import FastMCP
    from starlette.types import ASGIApp, Receive, Scope, Send

    from markdocs.config import Settings

log = structlog.get_logger()

SUPPORTED_PROTOCOL_VERSIONS: frozenset[str] = frozenset({"2025-11-25", "2025-06-18", "2025-03-26"})
API_KEY_HEADER = "x-api-key"
MCP_PATH = "/mcp"
_LOCALHOST_ORIGIN = re.compile(r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$")
_OPEN_PATHS = frozenset({"/health"})


def _reject(scope: Scope, status_code: int, message: str) -> JSONResponse:
    log.warning("http_request_rejected", path=scope.get("path"), status_code=status_code)
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


class DocsGatewayMiddleware:
    """Pure ASGI middleware in front of every HTTP request.

    1. Service API key in ``X-API-Key`` when one is configured; /health is exempt.
    2. Origin must be localhost, against DNS rebinding.
    3. MCP-Protocol-Version must be known, on the MCP endpoint only.

    ``Authorization`` is not inspected: on the REST API it carries the
    caller's Google OAuth token.
    """

    def __init__(self, app: ASGIApp, *, api_key: str | None = None) -> None:
        self.app = app
        self.api_key = api_key

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            headers = Headers(scope=scope)
            path: str = scope["path"]

            if self.api_key and path not in _OPEN_PATHS:
                presented = headers.get(API_KEY_HEADER, "")
                if not secrets.compare_digest(presented.encode(), self.api_key.encode()):
                    response = _reject(scope, 401, "Unauthorized: invalid API key")
                    await response(scope, receive, send)
                    return

            origin = headers.get("origin", "")
            if origin and not _LOCALHOST_ORIGIN.match(origin):
                response = _reject(scope, 403, "Forbidden origin")
                await response(scope, receive, send)
                return

            proto_version = headers.get("mcp-protocol-version", "")
            if (
                path.startswith(MCP_PATH)
                and proto_version
                and proto_version not in SUPPORTED_PROTOCOL_VERSIONS
            ):
                response = _reject(scope, 400, f"Unsupported protocol version: {proto_version}")
                await response(scope, receive, send)
                return

        await self.app(scope, receive, send)


def build_http_app(mcp: FastMCP, settings: Settings, *, api_key: str | None = None) -> ASGIApp:
    """Compose the REST routes and the MCP endpoint into one secured ASGI app.

    The app's lifespan owns the Docs API client used by the REST routes and
    runs the MCP session manager, which a mounted sub-app cannot start itself.
    """
    mcp_app = mcp.streamable_http_app()

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        http_client = build_http_client(settings.docs)
        app.state.markdocs = AppState(
            settings=settings,
            http_client=http_client,
            docs_client=DocsClient(http_client, base_url=settings.docs.api_base_url),
        )
        async with mcp.session_manager.run():
            try:
                yield
            finally:
                await http_client.aclose()

    app = Starlette(
        routes=[*http_api.routes, Mount("/", app=mcp_app)],
        lifespan=lifespan,
    )
    return DocsGatewayMiddleware(app, api_key=api_key)


def run_http_server(mcp: FastMCP, settings: Settings) -> None:
    """Serve MCP and the REST API over HTTP until interrupted."""
    http_log = log.bind(transport="http")

    api_key: str | None = settings.server.api_key or None
    if settings.server.auth_enabled and not api_key:
        api_key = secrets.token_urlsafe(32)
        http_log.warning("http_api_key_auto_generated", api_key=api_key)
    if not settings.server.auth_enabled:
        api_key = None
        http_log.warning("http_auth_disabled")

    http_log.info(
        "http_server_starting",
        host=settings.server.host,
        port=settings.server.port,
        mcp_path=MCP_PATH,
    )
    uvicorn.run(
        build_http_app(mcp, settings, api_key=api_key),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # structlog owns logging
    )
