"""Wire-level integration tests for MCP error envelope behavior."""

from __future__ import annotations

import json
import subprocess
import sys


def _run_mcp_exchange(env: dict[str, str], tool: str, arguments: dict) -> dict:
    """Initialise a stdio server, call one tool, and return its response."""
    proc = subprocess.Popen(
        [sys.executable, "-m", "markdocs.server"],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        env=env,
    )

    assert proc.stdin is not None
    assert proc.stdout is not None
    assert proc.stderr is not None

    messages = [
        {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "initialize",
            "params": {
                "protocolVersion": "2025-11-25",
                "capabilities": {},
                "clientInfo": {"name": "pytest", "version": "0"},
            },
        },
        {"jsonrpc": "2.0", "method": "notifications/initialized"},
        {
            "jsonrpc": "2.0",
            "id": 2,
            "method": "tools/call",
            "params": {"name": tool, "arguments": arguments},
        },
    ]
    for message in messages:
        proc.stdin.write(json.dumps(message) + "\n")
    proc.stdin.flush()

    # Keep stdin open until the tool call is answered; closing it early tears
    # down the stdio transport before in-flight handlers respond.
    response: dict = {}
    while True:
        line = proc.stdout.readline()
        if not line:
            break
        if line.strip():
            parsed = json.loads(line)
            if parsed.get("id") == 2:
                response = parsed
                break

    proc.stdin.close()
    proc.stderr.read()  # Drain for clean process shutdown on all platforms
    proc.wait(timeout=10)
    proc.stdout.close()
    proc.stderr.close()
    return response


def test_markdocs_error_serializes_to_structured_tool_error(
    subprocess_env: dict[str, str],
) -> None:
    """MarkdocsError should be returned as structured JSON in tool result text."""
    tool_response = _run_mcp_exchange(
        subprocess_env,
        "create_document",
        {"doc_name": "   ", "markdown": "# Title", "access_token": "t"},
    )

    assert tool_response["result"]["isError"] is True

    text_payload = tool_response["result"]["content"][0]["text"]
    assert "Error executing tool" not in text_payload

    parsed = json.loads(text_payload)
    assert parsed["error"]["code"] == "INVALID_INPUT"
    assert parsed["error"]["recoverable"] is False
    assert "doc_name must not be empty" in parsed["error"]["message"]


def test_convert_markdown_over_stdio(subprocess_env: dict[str, str]) -> None:
    tool_response = _run_mcp_exchange(
        subprocess_env,
        "convert_markdown",
        {"markdown": "**bold**"},
    )

    result = tool_response["result"]
    assert result.get("isError") is not True
    payload = json.loads(result["content"][0]["text"])
    assert payload["requests"][1]["updateTextStyle"]["range"] == {
        "startIndex": 1,
        "endIndex": 9,
    }
