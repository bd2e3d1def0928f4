"""Tool handler for convert_markdown.

Receives AppState, runs the converter, and returns the Docs API requests
without touching the network. No MCP or FastMCP imports — server.py handles
the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from markdocs.converter import convert
from markdocs.errors import ErrorCode, MarkdocsError
from markdocs.models.tools import ConvertMarkdownInput, ConvertMarkdownOutput

if TYPE_CHECKING:
    from markdocs.state import AppState


async def handle(markdown: str, state: AppState) -> dict:
    """Handle a convert_markdown tool call."""
    log = structlog.get_logger().bind(tool="convert_markdown")
    log.info("handler_called")

    # Validate input
    try:
        validated = ConvertMarkdownInput(markdown=markdown)
    except ValueError as exc:
        raise MarkdocsError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide the Markdown document as a string.",
            recoverable=False,
        ) from exc

    result = convert(
        validated.markdown,
        start_index=state.settings.converter.start_index,
        indent_pt_per_space=state.settings.converter.indent_pt_per_space,
    )

    output = ConvertMarkdownOutput(
        requests=result.requests(),
        request_count=len(result.operations),
        end_index=result.end_index,
    )
    return output.model_dump(mode="json")
