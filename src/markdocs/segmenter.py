"""Block segmenter for Markdown source.

Single-pass walk over the source lines. Each line is classified into exactly
one block; a fenced code block consumes its opening fence, its body and its
closing fence as one block. Rules are tried in a fixed priority order:

  1. blank (empty or whitespace-only)
  2. ATX heading, levels 1–6
  3. opening code fence (``` with an optional alphanumeric language tag)
  4. bullet item (-, * or +)
  5. numbered item (digits followed by a dot)
  6. paragraph (anything else)

Consecutive paragraph lines are not merged: every non-blank line outside a
fence is its own block.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from markdocs.models.blocks import (
    Blank,
    BulletItem,
    CodeBlock,
    Heading,
    NumberedItem,
    Paragraph,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from markdocs.models.blocks import Block

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_FENCE_OPEN_RE = re.compile(r"^```([A-Za-z0-9]*)$")
_BULLET_RE = re.compile(r"^(\s*)[-*+]\s+(.+)$")
_NUMBERED_RE = re.compile(r"^(\s*)[0-9]+\.\s+(.+)$")

FENCE = "```"


def split_lines(markdown: str) -> list[str]:
    """Split source text on ``\\n`` after folding ``\\r\\n`` endings.

    A trailing newline yields a trailing empty line, which becomes a blank
    block.
    """
    return markdown.replace("\r\n", "\n").split("\n")


def segment(markdown: str) -> Iterator[Block]:
    """Yield the blocks of *markdown* in source order.

    Pure function of its input: iterating twice over the same text yields
    equal block sequences.
    """
    lines = split_lines(markdown)
    i = 0
    while i < len(lines):
        line = lines[i]
        stripped = line.strip()

        if not stripped:
            yield Blank()
            i += 1
            continue

        match = _HEADING_RE.match(line)
        if match:
            yield Heading(level=len(match.group(1)), text=match.group(2))
            i += 1
            continue

        fence = _FENCE_OPEN_RE.match(stripped)
        if fence:
            body, i = _consume_fence(lines, i + 1)
            yield CodeBlock(language=fence.group(1), lines=body)
            continue

        match = _BULLET_RE.match(line)
        if match:
            yield BulletItem(indent=len(match.group(1)), text=match.group(2))
            i += 1
            continue

        match = _NUMBERED_RE.match(line)
        if match:
            yield NumberedItem(indent=len(match.group(1)), text=match.group(2))
            i += 1
            continue

        yield Paragraph(text=line)
        i += 1


def _consume_fence(lines: list[str], start: int) -> tuple[tuple[str, ...], int]:
    """Collect fence body lines from *start* up to the closing fence.

    Returns the body and the index of the first line after the closing fence.
    An unterminated fence runs to end of input.
    """
    end = start
    while end < len(lines) and not lines[end].strip().startswith(FENCE):
        end += 1
    body = tuple(lines[start:end])
    # Step over the closing fence when there is one
    return body, min(end + 1, len(lines))
