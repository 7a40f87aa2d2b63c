"""Character access layer for the streaming HTML tokenizer.

This module provides the cursor abstraction every scanner is built on.
"""

from .cursor import Cursor, TokenPosition

__all__ = [
    "Cursor",
    "TokenPosition",
]
