from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    COLLABORATOR_FAILURE = "COLLABORATOR_FAILURE"
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"


class MarkdocsError(Exception):
    """Raised for all expected failure conditions.

    Caught by server.py and serialised into the MCP error response.
    Never catch this inside business logic — let it propagate to the
    MCP layer so the agent receives a structured error with a suggestion.

    ``detail`` carries the Docs API's original failure payload (response body
    or transport error text) when the failure came from that collaborator.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable
        self.detail = detail

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
                "detail": self.detail,
            }
        }
