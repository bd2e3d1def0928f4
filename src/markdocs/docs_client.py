"""Google Docs API client.

All network I/O against the Docs API goes through a single DocsClient
instance shared across tool calls. The DocsClient receives an
httpx.AsyncClient via constructor injection — the lifespan owns the client
lifecycle.

Requests are authenticated per call with the caller's OAuth access token.
Failures are never retried here; they surface as MarkdocsError carrying the
API's original response body in ``detail``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from markdocs import __version__
from markdocs.errors import ErrorCode, MarkdocsError

if TYPE_CHECKING:
    from markdocs.config import DocsApiSettings

log = structlog.get_logger()

DOCUMENT_URL_TEMPLATE = "https://docs.google.com/document/d/{document_id}/edit"


def build_http_client(settings: DocsApiSettings | None = None) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    timeout = settings.timeout_seconds if settings is not None else 30.0
    return httpx.AsyncClient(
        follow_redirects=False,
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": f"markdocs/{__version__}"},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


def document_url(document_id: str) -> str:
    return DOCUMENT_URL_TEMPLATE.format(document_id=document_id)


def _auth_headers(access_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}


class DocsClient:
    """Thin async wrapper over the three Docs API calls markdocs needs."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = "https://docs.googleapis.com",
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")

    async def create_document(self, title: str, access_token: str) -> str:
        """Create an empty document and return its ID."""
        data = await self._request(
            "POST",
            "/v1/documents",
            access_token,
            action="create_document",
            json={"title": title},
        )
        document_id = data.get("documentId")
        if not document_id:
            raise MarkdocsError(
                code=ErrorCode.COLLABORATOR_FAILURE,
                message="Docs API create response has no documentId",
                suggestion="The Docs API returned an unexpected payload; try again later.",
                recoverable=True,
                detail=str(data),
            )
        log.info("document_created", document_id=document_id)
        return document_id

    async def batch_update(
        self,
        document_id: str,
        requests: list[dict],
        access_token: str,
    ) -> None:
        """Apply *requests* to the document as one atomic batch."""
        await self._request(
            "POST",
            f"/v1/documents/{document_id}:batchUpdate",
            access_token,
            action="batch_update",
            json={"requests": requests},
        )
        log.info("batch_update_complete", document_id=document_id, request_count=len(requests))

    async def get_document(self, document_id: str, access_token: str) -> dict:
        """Fetch document metadata (title, revision, body)."""
        return await self._request(
            "GET",
            f"/v1/documents/{document_id}",
            access_token,
            action="get_document",
        )

    async def _request(
        self,
        method: str,
        path: str,
        access_token: str,
        *,
        action: str,
        json: dict | None = None,
    ) -> dict:
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(
                method,
                url,
                headers=_auth_headers(access_token),
                json=json,
            )
        except httpx.HTTPError as exc:
            log.warning("docs_api_network_error", action=action, error=str(exc))
            raise MarkdocsError(
                code=ErrorCode.COLLABORATOR_FAILURE,
                message=f"Network error calling Docs API ({action}): {exc}",
                suggestion="The Docs API may be temporarily unreachable.",
                recoverable=True,
                detail=str(exc),
            ) from exc

        if not response.is_success:
            log.warning(
                "docs_api_error",
                action=action,
                status_code=response.status_code,
            )
            raise _error_for_response(action, response)

        try:
            return response.json()
        except ValueError as exc:
            log.warning(
                "docs_api_invalid_json",
                action=action,
                status_code=response.status_code,
            )
            raise MarkdocsError(
                code=ErrorCode.COLLABORATOR_FAILURE,
                message=f"Docs API returned a non-JSON body ({action})",
                suggestion="The Docs API returned an unexpected payload; try again later.",
                recoverable=True,
                detail=response.text,
            ) from exc


def _error_for_response(action: str, response: httpx.Response) -> MarkdocsError:
    status = response.status_code
    detail = response.text
    if status == 404:
        return MarkdocsError(
            code=ErrorCode.DOCUMENT_NOT_FOUND,
            message=f"HTTP 404 from Docs API ({action})",
            suggestion="Check the document ID and that the token's account can access it.",
            recoverable=False,
            detail=detail,
        )
    if status in (401, 403):
        return MarkdocsError(
            code=ErrorCode.COLLABORATOR_FAILURE,
            message=f"HTTP {status} from Docs API ({action})",
            suggestion="The access token is missing a Docs scope, expired, or revoked.",
            recoverable=False,
            detail=detail,
        )
    return MarkdocsError(
        code=ErrorCode.COLLABORATOR_FAILURE,
        message=f"HTTP {status} from Docs API ({action})",
        suggestion="The Docs API rejected the request or is temporarily unavailable.",
        recoverable=status >= 500,
        detail=detail,
    )
