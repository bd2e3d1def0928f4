"""Cursor-tracked operation emitter.

Turns blocks into an ordered list of Docs API operations. Every block is
inserted at the cursor, and every style operation for that block is derived
from the range the insertion returned, so styles can never be addressed
against a stale offset.

Only :class:`Cursor` advances the offset. The emitter reads ranges from it;
the inline scanner only ever sees the start of the paragraph it styles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from markdocs import inline
from markdocs.models.blocks import (
    Blank,
    BulletItem,
    CodeBlock,
    Heading,
    NumberedItem,
    Paragraph,
)
from markdocs.models.operations import (
    BulletPreset,
    InsertText,
    Range,
    SetBullet,
    SetIndent,
    SetParagraphStyle,
    SetTextStyle,
    utf16_len,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from markdocs.models.blocks import Block
    from markdocs.models.operations import Operation

log = structlog.get_logger()

CODE_FONT_FAMILY = "Courier New"
CODE_BACKGROUND_RGB = (0.95, 0.95, 0.95)


class Cursor:
    """Next free offset in the target document's body.

    Starts at 1 by default: offset 0 holds the title paragraph the Docs API
    creates with every new document.
    """

    def __init__(self, start: int = 1) -> None:
        self._position = start

    @property
    def position(self) -> int:
        return self._position

    def insert(self, text: str, terminator: str = "\n") -> tuple[InsertText, int, int]:
        """Insert ``text + terminator`` at the cursor and advance past it.

        Returns the insert operation and the ``[start, end)`` offsets of
        *text* alone, the span that block and inline styles address.
        """
        start = self._position
        end = start + utf16_len(text)
        operation = InsertText(text=text + terminator, index=start)
        self._position = end + utf16_len(terminator)
        return operation, start, end


class Emitter:
    """Accumulates operations for one conversion. Not reusable across calls."""

    def __init__(self, *, start_index: int = 1, indent_pt_per_space: int = 18) -> None:
        self._cursor = Cursor(start_index)
        self._indent_pt_per_space = indent_pt_per_space
        self.operations: list[Operation] = []

    @property
    def end_index(self) -> int:
        return self._cursor.position

    def emit_all(self, blocks: Iterable[Block]) -> list[Operation]:
        for block in blocks:
            self.emit(block)
        return self.operations

    def emit(self, block: Block) -> None:
        if isinstance(block, Blank):
            self._insert("")
        elif isinstance(block, Heading):
            self._emit_heading(block)
        elif isinstance(block, BulletItem):
            self._emit_list_item(block.text, block.indent, BulletPreset.DISC)
        elif isinstance(block, NumberedItem):
            self._emit_list_item(block.text, block.indent, BulletPreset.DECIMAL)
        elif isinstance(block, CodeBlock):
            self._emit_code_block(block)
        elif isinstance(block, Paragraph):
            self._emit_paragraph(block)
        else:
            raise TypeError(f"Unknown block type: {type(block).__name__}")

    # ------------------------------------------------------------------

    def _insert(self, text: str, terminator: str = "\n") -> tuple[int, int]:
        operation, start, end = self._cursor.insert(text, terminator)
        self.operations.append(operation)
        return start, end

    def _emit_heading(self, block: Heading) -> None:
        start, end = self._insert(block.text)
        self.operations.append(
            SetParagraphStyle(
                named_style=f"HEADING_{block.level}",
                range=Range(start_index=start, end_index=end),
            )
        )

    def _emit_list_item(self, text: str, indent: int, preset: BulletPreset) -> None:
        start, end = self._insert(text)
        span = Range(start_index=start, end_index=end)
        self.operations.append(SetBullet(preset=preset, range=span))
        # Coarse nesting: one indent step per leading whitespace character
        if indent > 0:
            self.operations.append(
                SetIndent(start_pt=indent * self._indent_pt_per_space, first_line_pt=0, range=span)
            )

    def _emit_code_block(self, block: CodeBlock) -> None:
        content = "".join(f"{line}\n" for line in block.lines)
        if not content:
            # Fence with no body: nothing to insert, nothing to style
            log.debug("empty_code_block_skipped", language=block.language)
            return
        # Content already ends with a newline, so no terminator is added
        start, end = self._insert(content, terminator="")
        self.operations.append(
            SetTextStyle(
                range=Range(start_index=start, end_index=end),
                font_family=CODE_FONT_FAMILY,
                background_rgb=CODE_BACKGROUND_RGB,
            )
        )

    def _emit_paragraph(self, block: Paragraph) -> None:
        start, _ = self._insert(block.text)
        for span in inline.scan(block.text):
            self.operations.append(span.to_operation(start))
