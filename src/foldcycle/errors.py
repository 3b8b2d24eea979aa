from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    NO_HEADING = "NO_HEADING"
    BEFORE_FIRST_HEADING = "BEFORE_FIRST_HEADING"
    LINE_OUT_OF_RANGE = "LINE_OUT_OF_RANGE"
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"


class FoldCycleError(Exception):
    """Raised for every expected failure of a cycling request.

    The engines raise it when a structural precondition does not hold (no
    heading in the document, cursor before the first heading). Business logic
    never catches it: server.py serialises it into the MCP error response.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }
