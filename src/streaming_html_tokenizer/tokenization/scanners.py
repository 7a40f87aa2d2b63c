"""Primitive scanners for the HTML tokenizer.

Each scanner consumes characters from a ``Cursor`` and returns the scanned
text, ``None`` when nothing could be read, or raises ``TokenizeError`` when
the construct is malformed. Scanners only use the cursor primitives and never
look behind the current position.
"""

from typing import Optional

from streaming_html_tokenizer.character import Cursor

from .errors import TokenizeError, TokenizeErrorKind

QUOTE_CHARS = frozenset("\"'")
NAME_TERMINATORS = frozenset(">/")
ATTR_NAME_TERMINATORS = frozenset("=>/")
COMMENT_CLOSE_DASHES = 2  # Dashes required before '>' closes a comment


def fail(cursor: Cursor, kind: TokenizeErrorKind) -> TokenizeError:
    """Build an error located at the cursor's current position."""
    return TokenizeError(kind, cursor.location())


def _scan_until(cursor: Cursor, terminators: frozenset) -> str:
    """Consume characters up to whitespace or one of ``terminators``."""
    chars = []
    while True:
        char = cursor.peek()
        if char is None or char.isspace() or char in terminators:
            break
        chars.append(char)
        cursor.advance()
    return "".join(chars)


def scan_tag_name(cursor: Cursor) -> Optional[str]:
    """Read a tag name, stopping at whitespace, '>' or '/'.

    Returns:
        The name, or None when no character could be read
    """
    return _scan_until(cursor, NAME_TERMINATORS) or None


def scan_attribute_name(cursor: Cursor) -> Optional[str]:
    """Read an attribute name, which additionally stops at '='."""
    return _scan_until(cursor, ATTR_NAME_TERMINATORS) or None


def scan_attribute_value(cursor: Cursor) -> str:
    """Read a quoted or bare attribute value.

    A quoted value runs to the matching quote and may hold any other
    character, including '>' and the other quote style. A bare value ends at
    whitespace, '>', '/' or end of input and may contain '='.

    Raises:
        TokenizeError: INVALID_ATTRIBUTE when a quoted value is unterminated
    """
    if cursor.peek() not in QUOTE_CHARS:
        return _scan_until(cursor, NAME_TERMINATORS)

    quote = cursor.advance()
    chars = []
    while True:
        char = cursor.advance()
        if char is None:
            raise fail(cursor, TokenizeErrorKind.INVALID_ATTRIBUTE)
        if char == quote:
            return "".join(chars)
        chars.append(char)


def scan_comment_body(cursor: Cursor) -> str:
    """Read a comment body after its opening ``<!--``.

    The comment closes on the first '>' preceded by at least two dashes.
    A trailing ``--`` is stripped from the collected content.

    Raises:
        TokenizeError: MALFORMED_COMMENT when input ends before the comment closes
    """
    chars = []
    dash_count = 0
    while True:
        char = cursor.advance()
        if char is None:
            raise fail(cursor, TokenizeErrorKind.MALFORMED_COMMENT)
        if char == ">" and dash_count >= COMMENT_CLOSE_DASHES:
            content = "".join(chars)
            if content.endswith("--"):
                content = content[:-2]
            return content
        chars.append(char)
        dash_count = dash_count + 1 if char == "-" else 0


def scan_doctype_body(cursor: Cursor) -> str:
    """Read everything after ``<!`` up to the closing '>'.

    Raises:
        TokenizeError: UNEXPECTED_EOF when no '>' is found
    """
    chars = []
    while True:
        char = cursor.advance()
        if char is None:
            raise fail(cursor, TokenizeErrorKind.UNEXPECTED_EOF)
        if char == ">":
            return "".join(chars)
        chars.append(char)


def scan_text(cursor: Cursor) -> str:
    """Read character data up to the next '<' or end of input."""
    chars = []
    while True:
        char = cursor.peek()
        if char is None or char == "<":
            return "".join(chars)
        chars.append(char)
        cursor.advance()
