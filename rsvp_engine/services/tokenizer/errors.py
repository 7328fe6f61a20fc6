"""Tokenization errors."""

from rsvp_engine.models.enums import ErrorCode

# Every error the tokenizer raises can be fixed by the caller with new input
_RECOVERABLE_CODES = {
    ErrorCode.EMPTY_INPUT,
    ErrorCode.INVALID_WPM,
    ErrorCode.TOKENIZATION_FAILED,
}


class TokenizationError(ValueError):
    """Raised when text cannot be turned into a token stream.

    Attributes:
        code: The ErrorCode describing the failure.
        message: Human readable description (not meant for end users).
        recoverable: Whether the caller can retry with different input.
    """

    def __init__(self, code: ErrorCode, message: str, recoverable: bool | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = code in _RECOVERABLE_CODES if recoverable is None else recoverable

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "recoverable": self.recoverable,
        }
