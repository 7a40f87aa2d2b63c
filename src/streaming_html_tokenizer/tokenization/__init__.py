"""Tokenization engine for the streaming HTML tokenizer.

This module turns HTML text into a flat stream of tokens without building a
tree or validating structure.

Key Components:
    HTMLTokenizer: Pull-based tokenizer, one token per ``next_token`` call
    TokenStream: Lazy iterator that always starts from the beginning of the input
    Token: Base class of Doctype, StartTag, EndTag, Text and Comment
    TokenizeError: Raised for malformed tags, attributes, comments and doctypes
    EnhancedHTMLTokenizer: Configured API producing TokenizationResult objects
"""

from .errors import TokenizeError, TokenizeErrorKind
from .tokens import (
    Attribute,
    Comment,
    Doctype,
    EndTag,
    StartTag,
    Text,
    Token,
    TokenType,
)
from .tokenizer import HTMLTokenizer, TokenStream
from .api import (
    EnhancedHTMLTokenizer,
    TokenFilter,
    TokenizationResult,
    tokenize,
    tokenize_string,
)

__all__ = [
    "Attribute",
    "Comment",
    "Doctype",
    "EndTag",
    "EnhancedHTMLTokenizer",
    "HTMLTokenizer",
    "StartTag",
    "Text",
    "Token",
    "TokenFilter",
    "TokenStream",
    "TokenType",
    "TokenizationResult",
    "TokenizeError",
    "TokenizeErrorKind",
    "tokenize",
    "tokenize_string",
]
