"""Tests for HTML token types."""

import pytest

from streaming_html_tokenizer.shared.config import TOKEN_TYPE_NAMES
from streaming_html_tokenizer.tokenization import (
    Comment,
    Doctype,
    EndTag,
    StartTag,
    Text,
    Token,
    TokenType,
)


class TestTokenTypes:
    """Tests for token kinds and shared behavior."""

    @pytest.mark.parametrize("token,token_type,value", [
        (Doctype("DOCTYPE html"), TokenType.DOCTYPE, "DOCTYPE html"),
        (StartTag("div"), TokenType.START_TAG, "div"),
        (EndTag("div"), TokenType.END_TAG, "div"),
        (Text("hello"), TokenType.TEXT, "hello"),
        (Comment(" c "), TokenType.COMMENT, " c "),
    ])
    def test_type_and_value(self, token, token_type, value):
        """Test each variant reports its kind and main text."""
        assert isinstance(token, Token)
        assert token.type is token_type
        assert token.value == value

    def test_token_base_is_abstract(self):
        """Test the Token base class cannot be instantiated."""
        with pytest.raises(TypeError):
            Token()

    def test_config_type_names_match_enum(self):
        """Test configuration knows exactly the token type names."""
        assert TOKEN_TYPE_NAMES == {token_type.name for token_type in TokenType}

    def test_equality_is_structural(self):
        """Test tokens compare by content."""
        assert StartTag("a", [("x", "1")]) == StartTag("a", [("x", "1")], False)
        assert StartTag("a", [("x", "1")]) != StartTag("a", [("x", "2")])
        assert Text("a") != Comment("a")

    def test_start_tag_defaults(self):
        """Test a start tag defaults to no attributes and not self-closing."""
        tag = StartTag("p")
        assert tag.attributes == []
        assert tag.self_closing is False
        assert StartTag("q").attributes is not tag.attributes


class TestStartTag:
    """Tests for StartTag helpers."""

    def test_get_attribute_returns_first(self):
        """Test duplicate attributes resolve to the first occurrence."""
        tag = StartTag("a", [("href", "x"), ("href", "y")])
        assert tag.get_attribute("href") == "x"
        assert tag.get_attribute("id") is None

    def test_has_attribute(self):
        """Test attribute presence, including valueless attributes."""
        tag = StartTag("input", [("disabled", "")])
        assert tag.has_attribute("disabled")
        assert not tag.has_attribute("DISABLED")


class TestSerialization:
    """Tests for to_dict."""

    def test_text_to_dict(self):
        """Test simple tokens serialize type and value."""
        assert Text("hi").to_dict() == {"type": "TEXT", "value": "hi"}
        assert EndTag("p").to_dict() == {"type": "END_TAG", "value": "p"}

    def test_start_tag_to_dict(self):
        """Test start tags include attributes and the self-closing flag."""
        tag = StartTag("img", [("src", "a.png")], True)
        assert tag.to_dict() == {
            "type": "START_TAG",
            "value": "img",
            "attributes": [["src", "a.png"]],
            "self_closing": True,
        }
