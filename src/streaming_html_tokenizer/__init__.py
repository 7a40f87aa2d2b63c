"""Streaming HTML Tokenizer.

A small, single-pass HTML tokenizer that converts text into a lazily produced
stream of tags, text runs, comments and doctype declarations without building
a DOM.

Progressive API Disclosure:
- Level 1: Simple functions - tokenize(), tokenize_string()
- Level 2: Pull tokenizer and lazy stream - HTMLTokenizer, TokenStream
- Level 3: Configured tokenizer - EnhancedHTMLTokenizer with TokenizationConfig
"""

__version__ = "0.1.0"
__author__ = "Streaming HTML Tokenizer Team"

from .shared.config import TokenizationConfig
from .tokenization import (
    Comment,
    Doctype,
    EndTag,
    EnhancedHTMLTokenizer,
    HTMLTokenizer,
    StartTag,
    Text,
    Token,
    TokenizationResult,
    TokenizeError,
    TokenizeErrorKind,
    TokenStream,
    TokenType,
    tokenize,
    tokenize_string,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "tokenize",
    "tokenize_string",

    # Level 2: Core tokenizer
    "HTMLTokenizer",
    "TokenStream",

    # Level 3: Configured tokenizer
    "EnhancedHTMLTokenizer",
    "TokenizationConfig",
    "TokenizationResult",

    # Tokens and errors
    "Token",
    "TokenType",
    "Doctype",
    "StartTag",
    "EndTag",
    "Text",
    "Comment",
    "TokenizeError",
    "TokenizeErrorKind",
]
