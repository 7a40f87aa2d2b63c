"""High-level tokenization API with result objects and diagnostics.

This module wraps the core tokenizer with configuration, token filtering,
metrics and diagnostic reporting. Errors from the core are caught once here
and turned into an unsuccessful ``TokenizationResult``; the streaming entry
point lets them propagate instead.
"""

import re
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set

from streaming_html_tokenizer.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    TokenizationConfig,
    TokenizationMetadata,
    get_logger,
)
from streaming_html_tokenizer.shared.config import FilterMode

from .errors import TokenizeError
from .tokenizer import TokenStream
from .tokens import Token, TokenType


@dataclass
class TokenizationResult:
    """Result object for a complete tokenization run."""

    # Core results
    tokens: List[Token] = field(default_factory=list)
    success: bool = True
    error: Optional[TokenizeError] = None
    truncated: bool = False

    # Metadata and diagnostics
    metadata: TokenizationMetadata = field(default_factory=TokenizationMetadata)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)

    correlation_id: Optional[str] = None

    @property
    def token_count(self) -> int:
        """Get total number of tokens kept after filtering."""
        return len(self.tokens)

    def get_tokens_by_type(self, token_type: TokenType) -> List[Token]:
        """Get all tokens of a specific type."""
        return [token for token in self.tokens if token.type == token_type]

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add a diagnostic entry."""
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            position=position,
            details=details,
            correlation_id=self.correlation_id
        ))

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of a specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_errors(self) -> bool:
        """Check if the run failed or recorded error diagnostics."""
        return self.error is not None or any(
            diag.severity >= DiagnosticSeverity.ERROR for diag in self.diagnostics
        )

    def raise_for_error(self) -> None:
        """Re-raise the tokenization error, if the run stopped on one."""
        if self.error is not None:
            raise self.error

    def summary(self) -> Dict[str, Any]:
        """Get summary statistics for the tokenization result."""
        return {
            "success": self.success,
            "token_count": self.token_count,
            "total_tokens": self.metadata.total_tokens,
            "filtered_tokens": self.metadata.filtered_tokens,
            "truncated": self.truncated,
            "token_types": dict(self.metadata.token_type_distribution),
            "error": str(self.error) if self.error else None,
            "processing_time_ms": self.performance.processing_time_ms,
            "characters_per_second": self.performance.characters_per_second,
            "diagnostics_count": len(self.diagnostics),
            "has_errors": self.has_errors(),
        }


class TokenFilter:
    """Token filtering and selection utilities."""

    def __init__(self, config: Optional[TokenizationConfig] = None) -> None:
        """Initialize token filter.

        Args:
            config: Configuration for filtering behavior
        """
        self.config = config or TokenizationConfig()
        self.filter_config = self.config.filtering
        flags = 0 if self.filter_config.case_sensitive else re.IGNORECASE
        self._patterns = [
            re.compile(pattern, flags) for pattern in self.filter_config.content_patterns
        ]

    def filter_by_type(
        self,
        tokens: Iterable[Token],
        token_types: Set[TokenType]
    ) -> List[Token]:
        """Filter tokens by type according to the configured mode."""
        if self.filter_config.mode == FilterMode.INCLUDE:
            return [token for token in tokens if token.type in token_types]
        return [token for token in tokens if token.type not in token_types]

    def filter_by_content_pattern(
        self,
        tokens: Iterable[Token],
        patterns: Optional[List["re.Pattern[str]"]] = None
    ) -> List[Token]:
        """Filter tokens whose value matches any of the patterns."""
        compiled = self._patterns if patterns is None else patterns
        if self.filter_config.mode == FilterMode.INCLUDE:
            return [
                token for token in tokens
                if any(regex.search(token.value) for regex in compiled)
            ]
        return [
            token for token in tokens
            if not any(regex.search(token.value) for regex in compiled)
        ]

    def matches(self, token: Token) -> bool:
        """Check a single token against the type and pattern filters."""
        return bool(self.apply_filters([token], limit=False))

    def apply_filters(self, tokens: Iterable[Token], limit: bool = True) -> List[Token]:
        """Apply the configured type, pattern and result-count filters."""
        filtered_tokens = list(tokens)

        if self.filter_config.token_types:
            token_types = {TokenType[name] for name in self.filter_config.token_types}
            filtered_tokens = self.filter_by_type(filtered_tokens, token_types)

        if self._patterns:
            filtered_tokens = self.filter_by_content_pattern(filtered_tokens)

        max_results = self.filter_config.max_results
        if limit and max_results is not None and len(filtered_tokens) > max_results:
            filtered_tokens = filtered_tokens[:max_results]

        return filtered_tokens


class EnhancedHTMLTokenizer:
    """HTML tokenizer with configuration, filtering and result reporting."""

    def __init__(
        self,
        config: Optional[TokenizationConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize enhanced HTML tokenizer.

        Args:
            config: Configuration for tokenization behavior
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or TokenizationConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "enhanced_tokenizer")
        self.token_filter = TokenFilter(self.config)

    def tokenize(self, text: str) -> TokenizationResult:
        """Tokenize ``text`` into a result object.

        Collection stops at the first malformed construct; the tokens scanned
        before it are kept and the error is stored on the result.

        Args:
            text: Document or fragment to tokenize

        Returns:
            TokenizationResult with tokens, metadata and diagnostics
        """
        start_time = time.perf_counter()
        stream = TokenStream(text, correlation_id=self.correlation_id)
        result = TokenizationResult(correlation_id=self.correlation_id)
        max_tokens = self.config.max_tokens

        self.logger.debug(
            "Starting tokenization",
            extra={"content_length": len(text), "max_tokens": max_tokens}
        )

        scanned: List[Token] = []
        try:
            for token in stream:
                scanned.append(token)
                result.metadata.add_token_type(token.type.name)
                if max_tokens is not None and len(scanned) >= max_tokens:
                    result.truncated = bool(text[stream.position:].strip())
                    break
        except TokenizeError as e:
            result.success = False
            result.error = e
            position = e.position
            self._diagnose(
                result,
                DiagnosticSeverity.ERROR,
                str(e),
                "html_tokenizer",
                position={
                    "line": position.line,
                    "column": position.column,
                    "offset": position.offset,
                } if position else None,
                details={"error_kind": e.kind.name}
            )
            self.logger.warning(
                "Tokenization stopped on malformed input",
                extra={"error_kind": e.kind.name, "tokens_scanned": len(scanned)}
            )

        if result.truncated:
            self._diagnose(
                result,
                DiagnosticSeverity.WARNING,
                f"Stopped after {max_tokens} tokens",
                "enhanced_tokenizer",
                details={"max_tokens": max_tokens}
            )

        result.tokens = self.token_filter.apply_filters(scanned)
        result.metadata.total_tokens = len(scanned)
        result.metadata.filtered_tokens = len(scanned) - len(result.tokens)
        if result.metadata.filtered_tokens:
            self._diagnose(
                result,
                DiagnosticSeverity.INFO,
                f"Filtered {result.metadata.filtered_tokens} tokens",
                "token_filter"
            )

        processing_time = (time.perf_counter() - start_time) * 1000
        if self.config.enable_metrics:
            result.performance.processing_time_ms = processing_time
            result.performance.characters_processed = stream.position
            result.performance.tokens_generated = len(scanned)

        self.logger.debug(
            "Tokenization completed",
            extra={
                "success": result.success,
                "token_count": result.token_count,
                "processing_time_ms": processing_time
            }
        )
        return result

    def tokenize_streaming(self, text: str) -> Iterator[Token]:
        """Lazily yield the tokens of ``text`` that pass the configured filter.

        ``max_results`` and ``max_tokens`` both end the stream early.

        Raises:
            TokenizeError: When a malformed construct is reached
        """
        max_tokens = self.config.max_tokens
        max_results = self.config.filtering.max_results
        if max_results == 0:
            return

        scanned = 0
        emitted = 0
        for token in TokenStream(text, correlation_id=self.correlation_id):
            scanned += 1
            if self.token_filter.matches(token):
                emitted += 1
                yield token
                if max_results is not None and emitted >= max_results:
                    return
            if max_tokens is not None and scanned >= max_tokens:
                return

    def configure(self, config: TokenizationConfig) -> None:
        """Update tokenizer configuration.

        Args:
            config: New configuration to apply
        """
        self.config = config
        self.correlation_id = config.correlation_id or self.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "enhanced_tokenizer")
        self.token_filter = TokenFilter(config)
        self.logger.debug("Tokenizer configuration updated")

    def _diagnose(
        self,
        result: TokenizationResult,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a diagnostic if diagnostics are enabled at this severity."""
        if not self.config.enable_diagnostics:
            return
        if severity < DiagnosticSeverity[self.config.diagnostic_level]:
            return
        result.add_diagnostic(severity, message, component, position, details)


def tokenize(text: str, config: Optional[TokenizationConfig] = None) -> TokenizationResult:
    """Tokenize ``text`` and return a result object.

    Args:
        text: Document or fragment to tokenize
        config: Optional configuration

    Returns:
        TokenizationResult; check ``success`` or call ``raise_for_error``
    """
    return EnhancedHTMLTokenizer(config).tokenize(text)


def tokenize_string(text: str) -> List[Token]:
    """Return every token of ``text``.

    Raises:
        TokenizeError: On the first malformed construct
    """
    return list(TokenStream(text))
