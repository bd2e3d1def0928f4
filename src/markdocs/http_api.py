"""REST endpoints served beside the MCP endpoint in HTTP mode.

  GET  /health                        liveness, never behind the API key
  GET  /api/markdown/status           service banner with version
  POST /api/markdown/convert          {"markdown"} -> batchUpdate requests
  POST /api/markdown/convert-to-gdoc  {"docName", "markdown"} -> new Google Doc

convert-to-gdoc takes the caller's Google OAuth token from
``Authorization: Bearer <token>``. Handlers reuse the tool handlers, so
validation and error codes match the MCP tools exactly.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog
from starlette.responses import JSONResponse
from starlette.routing import Route

import markdocs.tools.convert_markdown as t_convert
import markdocs.tools.create_document as t_create
from markdocs import __version__
from markdocs.errors import ErrorCode, MarkdocsError

if TYPE_CHECKING:
    from starlette.requests import Request

    from markdocs.state import AppState

log = structlog.get_logger()

_STATUS_FOR_CODE: dict[ErrorCode, int] = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.DOCUMENT_NOT_FOUND: 404,
    ErrorCode.COLLABORATOR_FAILURE: 502,
}


def _state(request: Request) -> AppState:
    return request.app.state.markdocs


def _error_response(exc: MarkdocsError) -> JSONResponse:
    return JSONResponse(
        {"success": False, **exc.to_dict()},
        status_code=_STATUS_FOR_CODE.get(exc.code, 500),
    )


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("authorization", "")
    if not header.startswith("Bearer "):
        return None
    return header[7:].strip() or None


async def _json_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as exc:
        raise MarkdocsError(
            code=ErrorCode.INVALID_INPUT,
            message="Request body is not valid JSON",
            suggestion="Send a JSON object with Content-Type: application/json.",
            recoverable=False,
        ) from exc
    if not isinstance(body, dict):
        raise MarkdocsError(
            code=ErrorCode.INVALID_INPUT,
            message=f"Request body must be a JSON object, got {type(body).__name__}",
            suggestion="Send a JSON object with Content-Type: application/json.",
            recoverable=False,
        )
    return body


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "timestamp": datetime.now(UTC).isoformat()})


async def status(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "success": True,
            "message": "Markdown to Google Docs API is working",
            "version": __version__,
        }
    )


async def convert(request: Request) -> JSONResponse:
    try:
        body = await _json_object(request)
        result = await t_convert.handle(body.get("markdown"), _state(request))
    except MarkdocsError as exc:
        log.warning("api_error", path=request.url.path, code=exc.code, message=exc.message)
        return _error_response(exc)
    return JSONResponse({"success": True, **result})


async def convert_to_gdoc(request: Request) -> JSONResponse:
    state = _state(request)
    token = _bearer_token(request)
    if token is None and not state.settings.docs.access_token:
        log.warning("api_missing_bearer", path=request.url.path)
        return JSONResponse(
            {
                "success": False,
                "error": {
                    "code": "UNAUTHORIZED",
                    "message": "Missing or invalid Authorization header",
                    "suggestion": "Send 'Authorization: Bearer <Google OAuth access token>'.",
                    "recoverable": False,
                },
            },
            status_code=401,
        )

    try:
        body = await _json_object(request)
        result = await t_create.handle(
            body.get("docName"), body.get("markdown"), token, state
        )
    except MarkdocsError as exc:
        log.warning("api_error", path=request.url.path, code=exc.code, message=exc.message)
        return _error_response(exc)

    return JSONResponse(
        {
            "success": True,
            "message": "Google Doc created successfully",
            "docId": result["document_id"],
            "docUrl": result["document_url"],
            "requestCount": result["request_count"],
        },
        status_code=201,
    )


routes = [
    Route("/health", health, methods=["GET"]),
    Route("/api/markdown/status", status, methods=["GET"]),
    Route("/api/markdown/convert", convert, methods=["POST"]),
    Route("/api/markdown/convert-to-gdoc", convert_to_gdoc, methods=["POST"]),
]
