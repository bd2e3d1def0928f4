from __future__ import annotations

from markdocs.models.blocks import (
    Blank,
    Block,
    BulletItem,
    CodeBlock,
    Heading,
    NumberedItem,
    Paragraph,
)
from markdocs.models.operations import (
    BulletPreset,
    InsertText,
    Operation,
    Range,
    SetBullet,
    SetIndent,
    SetParagraphStyle,
    SetTextStyle,
    utf16_len,
)
from markdocs.models.tools import (
    ConvertMarkdownInput,
    ConvertMarkdownOutput,
    CreateDocumentInput,
    CreateDocumentOutput,
    GetDocumentInput,
    GetDocumentOutput,
)

__all__ = [
    # blocks
    "Block",
    "Blank",
    "Heading",
    "BulletItem",
    "NumberedItem",
    "CodeBlock",
    "Paragraph",
    # operations
    "Operation",
    "Range",
    "BulletPreset",
    "InsertText",
    "SetParagraphStyle",
    "SetBullet",
    "SetIndent",
    "SetTextStyle",
    "utf16_len",
    # tools
    "ConvertMarkdownInput",
    "ConvertMarkdownOutput",
    "CreateDocumentInput",
    "CreateDocumentOutput",
    "GetDocumentInput",
    "GetDocumentOutput",
]
