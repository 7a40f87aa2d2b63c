"""Token types produced by the HTML tokenizer.

Every token is a small dataclass. The variants share a ``Token`` base that
exposes the token kind, its main text and a serializable form, so callers can
treat the stream uniformly while still matching on concrete classes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, ClassVar, Dict, List, Optional, Tuple

Attribute = Tuple[str, str]


class TokenType(Enum):
    """HTML token kinds emitted by the tokenizer."""

    DOCTYPE = auto()        # <!DOCTYPE ...> and any other <!...> construct
    START_TAG = auto()      # <name attr=value> or <name />
    END_TAG = auto()        # </name>
    TEXT = auto()           # Character content between tags
    COMMENT = auto()        # <!-- ... -->


class Token(ABC):
    """Base class for all HTML tokens."""

    type: ClassVar[TokenType]

    @property
    @abstractmethod
    def value(self) -> str:
        """Main text of the token: its content or its tag name."""

    def to_dict(self) -> Dict[str, Any]:
        """Convert the token to a JSON-friendly dictionary."""
        return {"type": self.type.name, "value": self.value}


@dataclass
class Doctype(Token):
    """Doctype-like declaration, delimiters excluded."""

    content: str
    type: ClassVar[TokenType] = TokenType.DOCTYPE

    @property
    def value(self) -> str:
        return self.content


@dataclass
class StartTag(Token):
    """Opening tag with its attributes in source order."""

    name: str
    attributes: List[Attribute] = field(default_factory=list)
    self_closing: bool = False
    type: ClassVar[TokenType] = TokenType.START_TAG

    @property
    def value(self) -> str:
        return self.name

    def get_attribute(self, name: str) -> Optional[str]:
        """Return the value of the first attribute called ``name``."""
        for attr_name, attr_value in self.attributes:
            if attr_name == name:
                return attr_value
        return None

    def has_attribute(self, name: str) -> bool:
        """Check whether the tag carries an attribute called ``name``."""
        return any(attr_name == name for attr_name, _ in self.attributes)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["attributes"] = [list(attr) for attr in self.attributes]
        data["self_closing"] = self.self_closing
        return data


@dataclass
class EndTag(Token):
    """Closing tag."""

    name: str
    type: ClassVar[TokenType] = TokenType.END_TAG

    @property
    def value(self) -> str:
        return self.name


@dataclass
class Text(Token):
    """Non-empty run of character data."""

    content: str
    type: ClassVar[TokenType] = TokenType.TEXT

    @property
    def value(self) -> str:
        return self.content


@dataclass
class Comment(Token):
    """Comment body with the ``<!--`` and ``-->`` markers removed."""

    content: str
    type: ClassVar[TokenType] = TokenType.COMMENT

    @property
    def value(self) -> str:
        return self.content
