"""Block variants produced by the segmenter.

A block is a classification of one source line, or of the run of lines
forming a fenced code block. Blocks carry no offsets; the emitter assigns
those as it inserts them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Blank:
    pass


@dataclass(frozen=True, slots=True)
class Heading:
    level: int  # 1–6
    text: str


@dataclass(frozen=True, slots=True)
class BulletItem:
    indent: int  # leading whitespace characters
    text: str


@dataclass(frozen=True, slots=True)
class NumberedItem:
    indent: int
    text: str


@dataclass(frozen=True, slots=True)
class CodeBlock:
    language: str  # "" when the opening fence has no tag
    lines: tuple[str, ...]  # body lines, verbatim, fences excluded


@dataclass(frozen=True, slots=True)
class Paragraph:
    text: str


Block = Blank | Heading | BulletItem | NumberedItem | CodeBlock | Paragraph
