"""Offset-addressed edit operations and their Docs API wire form.

Each operation serialises to exactly one ``batchUpdate`` request via
``to_request()``. Ranges are half-open and measured in UTF-16 code units.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BulletPreset(StrEnum):
    DISC = "BULLET_DISC_CIRCLE_SQUARE"
    DECIMAL = "NUMBERED_DECIMAL_NESTED"


class Range(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_index: int = Field(ge=0)
    end_index: int

    @model_validator(mode="after")
    def _non_empty(self) -> Range:
        if self.end_index <= self.start_index:
            raise ValueError(
                f"Empty range [{self.start_index}, {self.end_index}) cannot carry a style"
            )
        return self

    def to_dict(self) -> dict:
        return {"startIndex": self.start_index, "endIndex": self.end_index}


class InsertText(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["insert_text"] = "insert_text"
    text: str
    index: int = Field(ge=0)

    def to_request(self) -> dict:
        return {"insertText": {"text": self.text, "location": {"index": self.index}}}


class SetParagraphStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["set_paragraph_style"] = "set_paragraph_style"
    named_style: str  # e.g. "HEADING_2"
    range: Range

    def to_request(self) -> dict:
        return {
            "updateParagraphStyle": {
                "paragraphStyle": {"namedStyleType": self.named_style},
                "range": self.range.to_dict(),
                "fields": "namedStyleType",
            }
        }


class SetBullet(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["set_bullet"] = "set_bullet"
    preset: BulletPreset
    range: Range

    def to_request(self) -> dict:
        return {
            "createParagraphBullets": {
                "range": self.range.to_dict(),
                "bulletPreset": str(self.preset),
            }
        }


class SetIndent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["set_indent"] = "set_indent"
    start_pt: int
    first_line_pt: int = 0
    range: Range

    def to_request(self) -> dict:
        return {
            "updateParagraphStyle": {
                "paragraphStyle": {
                    "indentStart": {"magnitude": self.start_pt, "unit": "PT"},
                    "indentFirstLine": {"magnitude": self.first_line_pt, "unit": "PT"},
                },
                "range": self.range.to_dict(),
                "fields": "indentStart,indentFirstLine",
            }
        }


class SetTextStyle(BaseModel):
    """Character-level style over a range. Only the attributes that are set
    are sent, and ``fields`` names exactly those attributes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["set_text_style"] = "set_text_style"
    range: Range
    bold: bool | None = None
    italic: bool | None = None
    link_url: str | None = None
    font_family: str | None = None
    background_rgb: tuple[float, float, float] | None = None

    @model_validator(mode="after")
    def _has_style(self) -> SetTextStyle:
        if not self._text_style():
            raise ValueError("SetTextStyle needs at least one style attribute")
        return self

    def _text_style(self) -> dict:
        style: dict = {}
        if self.bold is not None:
            style["bold"] = self.bold
        if self.italic is not None:
            style["italic"] = self.italic
        if self.link_url is not None:
            style["link"] = {"url": self.link_url}
        if self.font_family is not None:
            style["fontFamily"] = self.font_family
        if self.background_rgb is not None:
            red, green, blue = self.background_rgb
            style["backgroundColor"] = {
                "color": {"rgbColor": {"red": red, "green": green, "blue": blue}}
            }
        return style

    def to_request(self) -> dict:
        style = self._text_style()
        return {
            "updateTextStyle": {
                "textStyle": style,
                "range": self.range.to_dict(),
                "fields": ",".join(style),
            }
        }


Operation = Annotated[
    InsertText | SetParagraphStyle | SetBullet | SetIndent | SetTextStyle,
    Field(discriminator="kind"),
]


def utf16_len(text: str) -> int:
    """Length of *text* in UTF-16 code units, the unit Docs API indexes count in."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2
