"""Markdown to Docs API operation conversion.

Pure business logic — receives Markdown text, returns operations.
No knowledge of AppState, MCP, or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from markdocs.emitter import Emitter
from markdocs.errors import ErrorCode, MarkdocsError
from markdocs.segmenter import segment

if TYPE_CHECKING:
    from markdocs.models.operations import Operation

log = structlog.get_logger()


@dataclass
class ConversionResult:
    operations: list[Operation]
    end_index: int  # Cursor after the last insertion

    def requests(self) -> list[dict]:
        """The operations in Docs API ``batchUpdate`` request form, in order."""
        return [operation.to_request() for operation in self.operations]


def convert(
    markdown: str,
    *,
    start_index: int = 1,
    indent_pt_per_space: int = 18,
) -> ConversionResult:
    """Convert Markdown text into an ordered list of offset-addressed operations.

    Never fails on malformed Markdown: every line classifies into some block.
    Raises MarkdocsError(INVALID_INPUT) only when *markdown* is not a string.
    """
    if not isinstance(markdown, str):
        raise MarkdocsError(
            code=ErrorCode.INVALID_INPUT,
            message=f"markdown must be a string, got {type(markdown).__name__}",
            suggestion="Pass the Markdown document as text.",
            recoverable=False,
        )

    log.info("conversion_started", length=len(markdown))

    emitter = Emitter(start_index=start_index, indent_pt_per_space=indent_pt_per_space)
    operations = emitter.emit_all(segment(markdown))

    log.info(
        "conversion_complete",
        request_count=len(operations),
        end_index=emitter.end_index,
    )
    return ConversionResult(operations=operations, end_index=emitter.end_index)
