"""Error types raised by the HTML tokenizer."""

from enum import Enum
from typing import Optional

from streaming_html_tokenizer.character import TokenPosition


class TokenizeErrorKind(Enum):
    """Closed set of tokenization failures, valued by their display message."""

    UNEXPECTED_EOF = "Unexpected end of input"
    INVALID_TAG = "Invalid HTML tag"
    INVALID_ATTRIBUTE = "Invalid HTML attribute"
    MALFORMED_COMMENT = "Malformed HTML comment"

    @property
    def message(self) -> str:
        """Human readable description of the failure."""
        return self.value


class TokenizeError(Exception):
    """Raised when the input contains a construct the tokenizer cannot scan.

    The tokenizer never recovers from these: the cursor is left where
    scanning stopped and the current parse pass should be abandoned.
    """

    def __init__(
        self,
        kind: TokenizeErrorKind,
        position: Optional[TokenPosition] = None
    ) -> None:
        """Initialize the error.

        Args:
            kind: Which of the failure kinds occurred
            position: Where scanning stopped, if known
        """
        message = kind.message
        if position is not None:
            message = f"{message} at {position}"
        super().__init__(message)
        self.kind = kind
        self.position = position

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenizeError):
            return NotImplemented
        return self.kind is other.kind and self.position == other.position

    def __hash__(self) -> int:
        return hash((self.kind, self.position))

    def __repr__(self) -> str:
        return f"TokenizeError({self.kind.name}, position={self.position!r})"
