"""Command-line interface module for the streaming HTML tokenizer.

This module provides the html-tokenize tool for dumping token streams,
validating documents and benchmarking the tokenizer.
"""

from .main import main

__all__ = ["main"]
