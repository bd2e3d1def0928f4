"""Tool handler for get_document.

Returns the metadata of an existing Google Doc. No MCP or FastMCP imports —
server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from markdocs.docs_client import document_url
from markdocs.errors import ErrorCode, MarkdocsError
from markdocs.models.tools import GetDocumentInput, GetDocumentOutput

if TYPE_CHECKING:
    from markdocs.state import AppState


async def handle(document_id: str, access_token: str | None, state: AppState) -> dict:
    """Handle a get_document tool call."""
    log = structlog.get_logger().bind(tool="get_document", document_id=document_id)
    log.info("handler_called")

    try:
        validated = GetDocumentInput(
            document_id=document_id,
            access_token=access_token or state.settings.docs.access_token,
        )
    except ValueError as exc:
        raise MarkdocsError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion=(
                "Provide a Google Doc ID (letters, digits, '-' and '_') and an OAuth "
                "access token (argument or server config)."
            ),
            recoverable=False,
        ) from exc

    if state.docs_client is None:
        raise RuntimeError("Docs API client not initialized")

    data = await state.docs_client.get_document(validated.document_id, validated.access_token)

    output = GetDocumentOutput(
        document_id=data.get("documentId", validated.document_id),
        title=data.get("title", ""),
        revision_id=data.get("revisionId"),
        document_url=document_url(validated.document_id),
    )
    return output.model_dump(mode="json")
