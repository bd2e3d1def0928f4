"""Integration tests for the REST API served in HTTP mode.

Routes run inside a bare Starlette app holding the test AppState; the Docs
API is mocked with respx, which leaves the in-process ASGI transport alone.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import pytest
import respx
from starlette.applications import Starlette

from markdocs import __version__, http_api

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from markdocs.state import AppState

DOCS_API = "https://docs.googleapis.com"
GOOGLE_TOKEN = "ya29.rest-token"


@pytest.fixture()
async def api(app_state: AppState) -> AsyncIterator[httpx.AsyncClient]:
    app = Starlette(routes=http_api.routes)
    app.state.markdocs = app_state
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://localhost",
    ) as client:
        yield client


class TestServiceEndpoints:
    async def test_health(self, api: httpx.AsyncClient) -> None:
        response = await api.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "T" in body["timestamp"]

    async def test_status_reports_version(self, api: httpx.AsyncClient) -> None:
        response = await api.get("/api/markdown/status")
        assert response.json() == {
            "success": True,
            "message": "Markdown to Google Docs API is working",
            "version": __version__,
        }


class TestConvert:
    async def test_returns_requests(self, api: httpx.AsyncClient) -> None:
        response = await api.post("/api/markdown/convert", json={"markdown": "**hi**"})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["end_index"] == 8
        assert body["requests"][1]["updateTextStyle"]["range"] == {
            "startIndex": 1,
            "endIndex": 7,
        }

    async def test_missing_markdown_is_400(self, api: httpx.AsyncClient) -> None:
        response = await api.post("/api/markdown/convert", json={})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"

    async def test_malformed_json_is_400(self, api: httpx.AsyncClient) -> None:
        response = await api.post(
            "/api/markdown/convert",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    async def test_non_object_body_is_400(self, api: httpx.AsyncClient) -> None:
        response = await api.post("/api/markdown/convert", json=["# list"])
        assert response.status_code == 400


class TestConvertToGdoc:
    async def test_creates_document(self, api: httpx.AsyncClient) -> None:
        with respx.mock:
            create_route = respx.post(f"{DOCS_API}/v1/documents").mock(
                return_value=httpx.Response(200, json={"documentId": "doc-9"})
            )
            respx.post(f"{DOCS_API}/v1/documents/doc-9:batchUpdate").mock(
                return_value=httpx.Response(200, json={"replies": []})
            )
            response = await api.post(
                "/api/markdown/convert-to-gdoc",
                json={"docName": "Notes", "markdown": "# Hello"},
                headers={"Authorization": f"Bearer {GOOGLE_TOKEN}"},
            )

        assert response.status_code == 201
        assert response.json() == {
            "success": True,
            "message": "Google Doc created successfully",
            "docId": "doc-9",
            "docUrl": "https://docs.google.com/document/d/doc-9/edit",
            "requestCount": 2,
        }
        sent = create_route.calls.last.request
        assert sent.headers["Authorization"] == f"Bearer {GOOGLE_TOKEN}"
        assert json.loads(sent.content) == {"title": "Notes"}

    async def test_missing_bearer_is_401(self, api: httpx.AsyncClient) -> None:
        response = await api.post(
            "/api/markdown/convert-to-gdoc",
            json={"docName": "Notes", "markdown": "# Hello"},
        )
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_configured_token_replaces_bearer(
        self, api: httpx.AsyncClient, app_state: AppState
    ) -> None:
        app_state.settings.docs.access_token = "server-token"
        with respx.mock:
            route = respx.post(f"{DOCS_API}/v1/documents").mock(
                return_value=httpx.Response(200, json={"documentId": "d"})
            )
            respx.post(f"{DOCS_API}/v1/documents/d:batchUpdate").mock(
                return_value=httpx.Response(200, json={})
            )
            response = await api.post(
                "/api/markdown/convert-to-gdoc",
                json={"docName": "Notes", "markdown": "text"},
            )
        assert response.status_code == 201
        assert route.calls.last.request.headers["Authorization"] == "Bearer server-token"

    @pytest.mark.parametrize(
        "payload",
        [
            {"markdown": "# x"},
            {"docName": "   ", "markdown": "# x"},
            {"docName": "n" * 256, "markdown": "# x"},
            {"docName": "Notes"},
            {"docName": "Notes", "markdown": 5},
        ],
    )
    async def test_invalid_payload_is_400(
        self, api: httpx.AsyncClient, payload: dict[str, object]
    ) -> None:
        response = await api.post(
            "/api/markdown/convert-to-gdoc",
            json=payload,
            headers={"Authorization": f"Bearer {GOOGLE_TOKEN}"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"

    async def test_docs_api_failure_is_502(self, api: httpx.AsyncClient) -> None:
        with respx.mock:
            respx.post(f"{DOCS_API}/v1/documents").mock(
                return_value=httpx.Response(403, text="insufficient scopes")
            )
            response = await api.post(
                "/api/markdown/convert-to-gdoc",
                json={"docName": "Notes", "markdown": "# Hello"},
                headers={"Authorization": f"Bearer {GOOGLE_TOKEN}"},
            )
        assert response.status_code == 502
        error = response.json()["error"]
        assert error["code"] == "COLLABORATOR_FAILURE"
        assert error["detail"] == "insufficient scopes"
