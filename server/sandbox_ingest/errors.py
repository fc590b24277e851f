"""
Errors raised when a model response cannot be turned into a file set
"""
from enum import Enum
from typing import Optional


class ParseErrorKind(str, Enum):
    NO_JSON_FOUND = "no_json_found"
    TRUNCATED_UNRECOVERABLE = "truncated_unrecoverable"
    EMPTY_FILE_SET = "empty_file_set"


class ResponseParseError(ValueError):
    """Base class for every fatal response parsing failure"""

    kind: ParseErrorKind
    default_message = "Failed to parse model response. Try a different model."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


class NoJsonFoundError(ResponseParseError):
    kind = ParseErrorKind.NO_JSON_FOUND
    default_message = (
        "No valid JSON found in response. "
        "The model may not support structured code generation."
    )


class TruncatedUnrecoverableError(ResponseParseError):
    kind = ParseErrorKind.TRUNCATED_UNRECOVERABLE
    default_message = (
        "Response was truncated and could not be repaired. "
        "The model may have hit token limits. Try a shorter prompt or different model."
    )


class EmptyFileSetError(ResponseParseError):
    kind = ParseErrorKind.EMPTY_FILE_SET
    default_message = "Model returned no code files. Try a model better suited for code generation."
