"""Where the package version surfaces, and what happens without metadata."""

from __future__ import annotations

import importlib
import importlib.metadata

import pytest

import markdocs
from markdocs.docs_client import build_http_client


def test_version_is_non_empty_string() -> None:
    assert isinstance(markdocs.__version__, str)
    assert markdocs.__version__


def test_user_agent_carries_version() -> None:
    client = build_http_client()
    assert client.headers["User-Agent"] == f"markdocs/{markdocs.__version__}"


def test_mcp_handshake_reports_package_version() -> None:
    from markdocs.server import mcp

    assert mcp._mcp_server.version == markdocs.__version__  # pyright: ignore[reportPrivateUsage]


def test_uninstalled_tree_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    def _not_installed(name: str) -> str:
        raise importlib.metadata.PackageNotFoundError(name)

    monkeypatch.setattr(importlib.metadata, "version", _not_installed)
    try:
        with pytest.warns(RuntimeWarning, match="fallback version '0.0.0\\+unknown'"):
            reloaded = importlib.reload(markdocs)
        assert reloaded.__version__ == "0.0.0+unknown"
    finally:
        monkeypatch.undo()
        importlib.reload(markdocs)
