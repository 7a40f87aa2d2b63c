"""Core HTML tokenization implementation.

This module turns an in-memory string into a flat stream of HTML tokens. It
offers two access patterns over the same scanning engine: ``next_token`` pulls
a single token, and ``iter`` returns a lazy ``TokenStream`` that always starts
from the beginning of the input with its own cursor.

The tokenizer is deliberately small: no script/style raw-text modes, no
character reference decoding, no case folding and no error recovery.
"""

import logging
from typing import Iterator, List, Optional

from streaming_html_tokenizer.character import Cursor

from .errors import TokenizeError, TokenizeErrorKind
from .scanners import (
    fail,
    scan_attribute_name,
    scan_attribute_value,
    scan_comment_body,
    scan_doctype_body,
    scan_tag_name,
    scan_text,
)
from .tokens import Attribute, Comment, Doctype, EndTag, StartTag, Text, Token

logger = logging.getLogger(__name__)


class HTMLTokenizer:
    """Pull-based HTML tokenizer over a single input string.

    Examples:
        >>> tokenizer = HTMLTokenizer("<p class=intro>Hi</p>")
        >>> tokenizer.next_token()
        StartTag(name='p', attributes=[('class', 'intro')], self_closing=False)
        >>> [token.value for token in tokenizer.iter()]
        ['p', 'Hi', 'p']
    """

    def __init__(self, text: str, correlation_id: Optional[str] = None) -> None:
        """Initialize the tokenizer.

        Args:
            text: Complete document or fragment to tokenize
            correlation_id: Optional correlation ID attached to log records
        """
        if not isinstance(text, str):
            raise TypeError(f"HTMLTokenizer expects str input, got {type(text).__name__}")
        self.text = text
        self.correlation_id = correlation_id
        self.cursor = Cursor(text)

    @property
    def position(self) -> int:
        """Current code point offset into the input."""
        return self.cursor.position

    def iter(self) -> "TokenStream":
        """Return a fresh token stream starting at the beginning of the input.

        The stream never shares this tokenizer's cursor, so earlier calls to
        ``next_token`` do not affect it.
        """
        return TokenStream(self.text, correlation_id=self.correlation_id)

    def __iter__(self) -> Iterator[Token]:
        return self.iter()

    def next_token(self) -> Optional[Token]:
        """Scan the next token.

        Leading whitespace is skipped before every token, so whitespace that
        only separates tags never produces a text token.

        Returns:
            The next token, or None once the input is exhausted

        Raises:
            TokenizeError: If the construct at the current position is malformed
        """
        cursor = self.cursor
        cursor.skip_whitespace()

        if cursor.is_eof():
            return None

        try:
            if cursor.peek() == "<":
                cursor.advance()
                return self._scan_tag()
            return self._scan_text()
        except TokenizeError as e:
            logger.debug(
                "Tokenization error",
                extra={
                    "component": "html_tokenizer",
                    "correlation_id": self.correlation_id,
                    "error_kind": e.kind.name,
                    "offset": cursor.position
                }
            )
            raise

    def _scan_text(self) -> Optional[Token]:
        """Emit a text token, or dispatch again when no text was read."""
        text = scan_text(self.cursor)
        if not text:
            return self.next_token()
        return Text(text)

    def _scan_tag(self) -> Token:
        """Dispatch on the character following '<'."""
        cursor = self.cursor
        char = cursor.peek()
        if char == "!":
            cursor.advance()
            return self._scan_markup_declaration()
        if char == "/":
            cursor.advance()
            return self._scan_end_tag()
        return self._scan_start_tag()

    def _scan_markup_declaration(self) -> Token:
        """Scan a comment or a doctype-like declaration after '<!'."""
        cursor = self.cursor
        if cursor.peek() == "-":
            if cursor.peek(1) != "-":
                raise fail(cursor, TokenizeErrorKind.MALFORMED_COMMENT)
            cursor.advance()
            cursor.advance()
            return Comment(scan_comment_body(cursor))
        return Doctype(scan_doctype_body(cursor))

    def _scan_start_tag(self) -> StartTag:
        cursor = self.cursor
        name = scan_tag_name(cursor)
        if name is None:
            raise fail(cursor, TokenizeErrorKind.INVALID_TAG)

        cursor.skip_whitespace()
        attributes = self._scan_attributes()
        cursor.skip_whitespace()

        char = cursor.peek()
        if char == "/":
            cursor.advance()
            if cursor.peek() != ">":
                raise fail(cursor, TokenizeErrorKind.INVALID_TAG)
            cursor.advance()
            self_closing = True
        elif char == ">":
            cursor.advance()
            self_closing = False
        else:
            raise fail(cursor, TokenizeErrorKind.INVALID_TAG)

        return StartTag(name, attributes, self_closing)

    def _scan_end_tag(self) -> EndTag:
        # End tags take no attributes: anything but whitespace before '>' fails.
        cursor = self.cursor
        name = scan_tag_name(cursor)
        if name is None:
            raise fail(cursor, TokenizeErrorKind.INVALID_TAG)

        cursor.skip_whitespace()
        if cursor.peek() != ">":
            raise fail(cursor, TokenizeErrorKind.INVALID_TAG)
        cursor.advance()
        return EndTag(name)

    def _scan_attributes(self) -> List[Attribute]:
        """Scan attributes in source order, keeping duplicates."""
        cursor = self.cursor
        attributes: List[Attribute] = []
        while True:
            cursor.skip_whitespace()
            if cursor.peek() in (">", "/"):
                break
            attribute = self._scan_attribute()
            if attribute is None:
                break
            attributes.append(attribute)
        return attributes

    def _scan_attribute(self) -> Optional[Attribute]:
        """Scan one ``name``, ``name=value`` or ``name = "value"`` attribute."""
        cursor = self.cursor
        name = scan_attribute_name(cursor)
        if name is None:
            return None

        cursor.skip_whitespace()
        if cursor.peek() != "=":
            return (name, "")

        cursor.advance()
        cursor.skip_whitespace()
        return (name, scan_attribute_value(cursor))


class TokenStream:
    """Lazy iterator over the tokens of an input string.

    Each stream owns a new tokenizer positioned at offset zero, so iterating
    the same input twice yields identical sequences. A malformed construct is
    raised from ``__next__`` as ``TokenizeError``; the stream object remains
    usable afterwards but what it yields next is unspecified.
    """

    def __init__(self, text: str, correlation_id: Optional[str] = None) -> None:
        self._tokenizer = HTMLTokenizer(text, correlation_id=correlation_id)
        self._exhausted = False
        logger.debug(
            "Starting token stream",
            extra={
                "component": "token_stream",
                "correlation_id": correlation_id,
                "char_count": len(text)
            }
        )

    @property
    def position(self) -> int:
        """Current code point offset of the underlying cursor."""
        return self._tokenizer.position

    def __iter__(self) -> "TokenStream":
        return self

    def __next__(self) -> Token:
        if self._exhausted:
            raise StopIteration
        token = self._tokenizer.next_token()
        if token is None:
            self._exhausted = True
            raise StopIteration
        return token
