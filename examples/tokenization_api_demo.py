#!/usr/bin/env python3
"""Demonstration of the streaming HTML tokenization API.

This example shows the pull tokenizer, the lazy token stream and the
configured API with filtering, limits and diagnostics.
"""

from streaming_html_tokenizer import (
    EnhancedHTMLTokenizer,
    HTMLTokenizer,
    StartTag,
    TokenizationConfig,
    TokenizeError,
    tokenize,
)
from streaming_html_tokenizer.shared import FilterConfig, FilterMode


def create_sample_html():
    """Create sample HTML content for demonstration."""
    return '''<!DOCTYPE html>
<html lang="en">
<head>
    <title>API Demo Document</title>
</head>
<body>
    <!-- navigation -->
    <nav class="top">
        <a href="/">Home</a>
        <a href='/docs' target=_blank>Docs</a>
    </nav>
    <p>Tokens are produced <em>one at a time</em>.</p>
    <img src="logo.png" alt="" />
</body>
</html>'''


def demonstrate_pull_tokenizer():
    """Pull tokens one by one with next_token."""
    print("=== Pull Tokenizer ===")
    tokenizer = HTMLTokenizer(create_sample_html())
    count = 0
    while True:
        token = tokenizer.next_token()
        if token is None:
            break
        count += 1
        if isinstance(token, StartTag) and token.has_attribute("href"):
            print(f"  link -> {token.get_attribute('href')}")
    print(f"  {count} tokens, cursor at offset {tokenizer.position}")
    print()


def demonstrate_basic_tokenization():
    """Tokenize a document into a result object."""
    print("=== Basic Tokenization ===")
    result = tokenize(create_sample_html())
    summary = result.summary()
    print(f"  success: {summary['success']}")
    print(f"  token types: {summary['token_types']}")
    print(f"  characters/second: {summary['characters_per_second']:.0f}")
    print()


def demonstrate_filtering():
    """Keep only selected token kinds."""
    print("=== Token Filtering ===")
    text_result = tokenize(create_sample_html(), TokenizationConfig.text_only())
    print(f"  text tokens: {[token.value for token in text_result.tokens]}")

    config = TokenizationConfig(filtering=FilterConfig(
        mode=FilterMode.INCLUDE,
        content_patterns=["^a$"],
    ))
    links = EnhancedHTMLTokenizer(config).tokenize(create_sample_html())
    print(f"  anchor tags: {len(links.tokens)}")
    for diagnostic in links.diagnostics:
        print(f"  [{diagnostic.severity.name}] {diagnostic.message}")
    print()


def demonstrate_streaming():
    """Stream tokens lazily with a token limit."""
    print("=== Streaming ===")
    tokenizer = EnhancedHTMLTokenizer(TokenizationConfig(max_tokens=5))
    for token in tokenizer.tokenize_streaming(create_sample_html()):
        print(f"  {token.type.name}: {token.value!r}")
    print()


def demonstrate_errors():
    """Show how malformed input is reported."""
    print("=== Error Handling ===")
    broken = "<p>fine</p>\n<!-- never closed"

    result = tokenize(broken)
    print(f"  success: {result.success}, kept {result.token_count} tokens")
    print(f"  error: {result.error}")

    try:
        list(HTMLTokenizer(broken))
    except TokenizeError as e:
        print(f"  raised {e.kind.name} at offset {e.position.offset}")
    print()


def main():
    """Run all demonstrations."""
    demonstrate_pull_tokenizer()
    demonstrate_basic_tokenization()
    demonstrate_filtering()
    demonstrate_streaming()
    demonstrate_errors()


if __name__ == "__main__":
    main()
