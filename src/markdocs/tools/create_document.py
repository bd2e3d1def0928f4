"""Tool handler for create_document.

Converts Markdown, creates an empty Google Doc, then applies every request
in a single batchUpdate. If the batch fails the computed requests are
dropped and the Docs API failure propagates unchanged; nothing is retried.
No MCP or FastMCP imports — server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from markdocs.converter import convert
from markdocs.docs_client import document_url
from markdocs.errors import ErrorCode, MarkdocsError
from markdocs.models.tools import CreateDocumentInput, CreateDocumentOutput

if TYPE_CHECKING:
    from markdocs.state import AppState


async def handle(
    doc_name: str,
    markdown: str,
    access_token: str | None,
    state: AppState,
) -> dict:
    """Handle a create_document tool call."""
    log = structlog.get_logger().bind(tool="create_document", doc_name=doc_name)
    log.info("handler_called")

    # Validate input
    try:
        validated = CreateDocumentInput(
            doc_name=doc_name,
            markdown=markdown,
            access_token=access_token or state.settings.docs.access_token,
        )
    except ValueError as exc:
        raise MarkdocsError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion=(
                "Provide a doc_name (1-255 chars), non-empty markdown, and an OAuth "
                "access token with the Docs scope (argument or server config)."
            ),
            recoverable=False,
        ) from exc

    if state.docs_client is None:
        raise RuntimeError("Docs API client not initialized")

    result = convert(
        validated.markdown,
        start_index=state.settings.converter.start_index,
        indent_pt_per_space=state.settings.converter.indent_pt_per_space,
    )
    requests = result.requests()

    document_id = await state.docs_client.create_document(
        validated.doc_name, validated.access_token
    )

    if requests:
        log.info("applying_requests", document_id=document_id, request_count=len(requests))
        await state.docs_client.batch_update(document_id, requests, validated.access_token)

    log.info("document_ready", document_id=document_id)

    output = CreateDocumentOutput(
        document_id=document_id,
        document_url=document_url(document_id),
        request_count=len(requests),
    )
    return output.model_dump(mode="json")
