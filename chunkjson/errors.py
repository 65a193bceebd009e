# chunkjson/errors.py
from typing import Optional


class DecodeError(Exception):
    """Base for every fatal decode failure. Carries optional phase/line context."""

    default_message = "Decode failed"

    def __init__(self, message: Optional[str] = None, *, phase: Optional[str] = None,
                 line_no: Optional[int] = None):
        self.message = message or self.default_message
        self.phase = phase
        self.line_no = line_no
        super().__init__(self.message)

    def with_context(self, phase: str, line_no: Optional[int] = None) -> "DecodeError":
        # Keep the innermost context if it was already set
        if self.phase is None:
            self.phase = phase
        if self.line_no is None:
            self.line_no = line_no
        return self

    def __str__(self) -> str:
        s = self.message
        if self.phase:
            s = f"{self.phase}: {s}"
        if self.line_no is not None:
            s = f"{s} (line {self.line_no})"
        return s


class MalformedInput(DecodeError):
    default_message = "Invalid JSON array"


class MalformedPatchLine(DecodeError):
    default_message = "Invalid extra line format"


class InvalidIndex(DecodeError):
    default_message = "Invalid number format"


class IndexOutOfBounds(DecodeError):
    default_message = "Index out of bounds"


class InvalidPlaceholder(DecodeError):
    default_message = "Invalid placeholder array"


class InvalidKeyIndex(DecodeError):
    default_message = "Invalid K-index format"


class NotAString(DecodeError):
    default_message = "Invalid string format"


class IOFailure(DecodeError):
    default_message = "I/O failure"


class CyclicReference(DecodeError):
    default_message = "Cyclic reference"


class DepthExceeded(DecodeError):
    default_message = "Maximum nesting depth exceeded"


class SettingsError(ValueError):
    pass
