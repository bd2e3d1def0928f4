"""Inline span scanner.

Finds bold, italic and link tokens in the raw text of one paragraph line.
Each pattern family is scanned independently, left to right, with
non-overlapping matches. Spans cover the whole token, delimiters included:
``**bold**`` styles all eight characters, ``[x](http://y)`` links the whole
``[x](http://y)`` text.

Offsets returned here are relative to the start of the line and counted in
UTF-16 code units.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from markdocs.models.operations import Range, SetTextStyle, utf16_len

if TYPE_CHECKING:
    from collections.abc import Iterator

_BOLD_RE = re.compile(r"(\*\*|__)(.*?)\1")
# Single * or _ not adjacent to another of the same character, so the
# delimiters of a bold token are never read as italic.
_ITALIC_RE = re.compile(r"(?<!\*|_)(\*|_)((?!\1).*?)\1(?!\1)")
_LINK_RE = re.compile(r"\[(.*?)\]\((.*?)\)")

SpanKind = Literal["bold", "italic", "link"]


@dataclass(frozen=True, slots=True)
class InlineSpan:
    kind: SpanKind
    start: int  # UTF-16 offset within the line
    end: int
    url: str | None = None  # links only

    def to_operation(self, line_start: int) -> SetTextStyle:
        """Style operation for this span, given where its line was inserted."""
        span_range = Range(start_index=line_start + self.start, end_index=line_start + self.end)
        if self.kind == "bold":
            return SetTextStyle(range=span_range, bold=True)
        if self.kind == "italic":
            return SetTextStyle(range=span_range, italic=True)
        return SetTextStyle(range=span_range, link_url=self.url)


def scan(text: str) -> Iterator[InlineSpan]:
    """Yield inline spans in *text*: all bold, then all italic, then all links.

    Each call builds fresh match iterators, so no scan position leaks between
    lines.
    """
    for match in _BOLD_RE.finditer(text):
        yield _span("bold", text, match)
    for match in _ITALIC_RE.finditer(text):
        yield _span("italic", text, match)
    for match in _LINK_RE.finditer(text):
        yield _span("link", text, match, url=match.group(2))


def _span(kind: SpanKind, text: str, match: re.Match[str], url: str | None = None) -> InlineSpan:
    start = utf16_len(text[: match.start()])
    end = start + utf16_len(match.group(0))
    return InlineSpan(kind=kind, start=start, end=end, url=url)
