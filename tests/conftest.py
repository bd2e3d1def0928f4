"""Shared test fixtures for the markdocs test suite."""

from __future__ import annotations

import os

import pytest

from markdocs.config import Settings


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's MARKDOCS__* environment out of the tests."""
    for name in list(os.environ):
        if name.startswith("MARKDOCS__"):
            monkeypatch.delenv(name)


@pytest.fixture()
def settings() -> Settings:
    """Settings with no default Docs API token configured."""
    return Settings(docs={"access_token": ""})


@pytest.fixture()
def sample_markdown() -> str:
    return (
        "# Release notes\n"
        "\n"
        "Highlights with **bold** and a [link](https://example.com).\n"
        "- faster\n"
        "  - much faster\n"
        "```bash\n"
        "pip install markdocs\n"
        "```"
    )
