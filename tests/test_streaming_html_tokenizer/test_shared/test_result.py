"""Tests for diagnostic and metric result types."""

import pytest

from streaming_html_tokenizer.shared.result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    TokenizationMetadata,
)


class TestDiagnosticEntry:
    """Tests for DiagnosticEntry."""

    def test_creation_and_to_dict(self):
        """Test a diagnostic serializes its fields."""
        entry = DiagnosticEntry(
            severity=DiagnosticSeverity.WARNING,
            message="Stopped after 5 tokens",
            component="enhanced_tokenizer",
            details={"max_tokens": 5},
        )
        assert entry.to_dict() == {
            "severity": "WARNING",
            "message": "Stopped after 5 tokens",
            "component": "enhanced_tokenizer",
            "position": None,
            "details": {"max_tokens": 5},
        }
        assert entry.timestamp > 0

    def test_validation(self):
        """Test message and component are required."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "x")
        with pytest.raises(ValueError, match="component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "x", "")

    def test_severity_ordering(self):
        """Test severities order like logging levels."""
        assert DiagnosticSeverity.DEBUG < DiagnosticSeverity.INFO < DiagnosticSeverity.ERROR
        assert DiagnosticSeverity.CRITICAL == 50


class TestPerformanceMetrics:
    """Tests for PerformanceMetrics."""

    def test_rates(self):
        """Test per-second rates."""
        metrics = PerformanceMetrics(
            processing_time_ms=2.0, characters_processed=100, tokens_generated=10
        )
        assert metrics.characters_per_second == 50000.0
        assert metrics.tokens_per_second == 5000.0

    def test_rates_without_time(self):
        """Test rates are zero without a measured time."""
        assert PerformanceMetrics().characters_per_second == 0.0
        assert PerformanceMetrics().tokens_per_second == 0.0


class TestTokenizationMetadata:
    """Tests for TokenizationMetadata."""

    def test_add_token_type(self):
        """Test the token type distribution."""
        metadata = TokenizationMetadata()
        metadata.add_token_type("TEXT")
        metadata.add_token_type("TEXT")
        metadata.add_token_type("START_TAG")
        assert metadata.token_type_distribution == {"TEXT": 2, "START_TAG": 1}

    def test_filter_rate(self):
        """Test the filter rate."""
        assert TokenizationMetadata().filter_rate == 0.0
        assert TokenizationMetadata(total_tokens=4, filtered_tokens=1).filter_rate == 0.25
