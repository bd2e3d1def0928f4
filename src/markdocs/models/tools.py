from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ConvertMarkdownInput(BaseModel):
    markdown: str


class ConvertMarkdownOutput(BaseModel):
    requests: list[dict]
    request_count: int
    end_index: int  # Cursor position after the last insertion


class CreateDocumentInput(BaseModel):
    doc_name: str = Field(max_length=255)
    markdown: str
    access_token: str

    @field_validator("doc_name")
    @classmethod
    def validate_doc_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("doc_name must not be empty")
        return v

    @field_validator("markdown")
    @classmethod
    def validate_markdown(cls, v: str) -> str:
        if not v:
            raise ValueError("markdown must not be empty")
        return v

    @field_validator("access_token")
    @classmethod
    def validate_access_token(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("access_token must not be empty")
        return v.strip()


class CreateDocumentOutput(BaseModel):
    document_id: str
    document_url: str
    request_count: int


class GetDocumentInput(BaseModel):
    document_id: str = Field(min_length=1, max_length=256, pattern=r"^[A-Za-z0-9_-]+$")
    access_token: str = Field(min_length=1)


class GetDocumentOutput(BaseModel):
    document_id: str
    title: str
    revision_id: str | None
    document_url: str
