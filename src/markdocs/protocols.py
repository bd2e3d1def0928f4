"""Protocol interfaces for swappable components.

Tool handlers and AppState reference these protocols, not the concrete
implementations, so tests can substitute lightweight in-memory fakes.
"""

from __future__ import annotations

from typing import Protocol


class DocsClientProtocol(Protocol):
    """Interface for the Google Docs API collaborator."""

    async def create_document(self, title: str, access_token: str) -> str: ...

    async def batch_update(
        self,
        document_id: str,
        requests: list[dict],
        access_token: str,
    ) -> None: ...

    async def get_document(self, document_id: str, access_token: str) -> dict: ...
