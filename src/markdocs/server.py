"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Start the correct transport (stdio or HTTP)
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import markdocs.tools.convert_markdown as t_convert
import markdocs.tools.create_document as t_create
import markdocs.tools.get_document as t_get
from markdocs import __version__
from markdocs.config import Settings
from markdocs.docs_client import DocsClient, build_http_client
from markdocs.errors import MarkdocsError
from markdocs.state import AppState
from markdocs.transport import run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr — stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    """Create and tear down all shared resources for the server's lifetime."""
    settings = Settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        transport=settings.server.transport,
    )

    http_client = build_http_client(settings.docs)
    docs_client = DocsClient(http_client, base_url=settings.docs.api_base_url)

    state = AppState(
        settings=settings,
        http_client=http_client,
        docs_client=docs_client,
    )

    log.info(
        "server_started",
        version=__version__,
        transport=settings.server.transport,
        docs_api=settings.docs.api_base_url,
        default_token_configured=bool(settings.docs.access_token),
    )

    try:
        yield state
    finally:
        await http_client.aclose()
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("markdocs", lifespan=lifespan)
# FastMCP doesn't expose a version kwarg — set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: MarkdocsError) -> CallToolResult:
    """Convert a MarkdocsError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


def _log_tool_error(tool: str, exc: MarkdocsError) -> None:
    log.warning(
        "tool_error",
        tool=tool,
        code=exc.code,
        message=exc.message,
        recoverable=exc.recoverable,
    )


@mcp.tool()
async def convert_markdown(markdown: str, ctx: Context) -> object:
    """Convert Markdown into Google Docs batchUpdate requests without creating a document.

    Requests address offsets starting at 1, the first free position of a new
    document. Inline bold, italic and link styles cover the whole Markdown
    token, delimiters included.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_convert.handle(markdown, state)
    except MarkdocsError as exc:
        _log_tool_error("convert_markdown", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="convert_markdown", exc_info=True)
        raise


@mcp.tool()
async def create_document(
    doc_name: str,
    markdown: str,
    ctx: Context,
    access_token: str | None = None,
) -> object:
    """Create a Google Doc named doc_name whose body is the converted Markdown.

    access_token is a Google OAuth access token with the Docs scope. When
    omitted, the server's configured token is used.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_create.handle(doc_name, markdown, access_token, state)
    except MarkdocsError as exc:
        _log_tool_error("create_document", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="create_document", exc_info=True)
        raise


@mcp.tool()
async def get_document(
    document_id: str,
    ctx: Context,
    access_token: str | None = None,
) -> object:
    """Fetch the title, revision and URL of an existing Google Doc."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_get.handle(document_id, access_token, state)
    except MarkdocsError as exc:
        _log_tool_error("get_document", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="get_document", exc_info=True)
        raise


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()

    if settings.server.transport == "http":
        _setup_logging(settings)
        run_http_server(mcp, settings)
        return

    mcp.run()


if __name__ == "__main__":
    main()
