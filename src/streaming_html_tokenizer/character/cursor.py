"""Character cursor over an in-memory HTML document.

The cursor is the only piece of the tokenizer that owns mutable state: a
single code point index into an immutable input string. Every scanner is
written in terms of the primitives defined here.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TokenPosition:
    """Position information for error reporting."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class Cursor:
    """Forward-only cursor over the code points of a string.

    Positions count Unicode code points, so ``peek`` and ``advance`` behave
    the same whatever encoding the text originally arrived in.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._length = len(text)
        self._position = 0

    @property
    def text(self) -> str:
        """The full input being scanned."""
        return self._text

    @property
    def position(self) -> int:
        """Current code point index."""
        return self._position

    def peek(self, offset: int = 0) -> Optional[str]:
        """Return the character ``offset`` places ahead without consuming it.

        Args:
            offset: Distance from the current position

        Returns:
            The character, or None past the end of input
        """
        index = self._position + offset
        if index < self._length:
            return self._text[index]
        return None

    def advance(self) -> Optional[str]:
        """Consume and return the current character, or None at end of input."""
        if self._position < self._length:
            char = self._text[self._position]
            self._position += 1
            return char
        return None

    def skip_whitespace(self) -> None:
        """Advance past a run of whitespace characters."""
        text = self._text
        position = self._position
        while position < self._length and text[position].isspace():
            position += 1
        self._position = position

    def is_eof(self) -> bool:
        """Check whether every character has been consumed."""
        return self._position >= self._length

    def location(self) -> TokenPosition:
        """Compute line and column for the current position.

        Only used when reporting errors, so the linear scan is acceptable.
        """
        consumed = self._text[:self._position]
        line = consumed.count("\n") + 1
        column = self._position - (consumed.rfind("\n") + 1) + 1
        return TokenPosition(line=line, column=column, offset=self._position)
