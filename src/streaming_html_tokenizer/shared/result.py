"""Diagnostic and metric types for HTML tokenization results.

This module defines the building blocks of ``TokenizationResult``: diagnostic
entries describing what happened during a run, performance metrics and
token-level metadata.
"""

import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional


class DiagnosticSeverity(IntEnum):
    """Severity levels for diagnostic entries, ordered like logging levels."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a JSON-friendly dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "position": self.position,
            "details": self.details,
        }


@dataclass
class PerformanceMetrics:
    """Performance metrics for a tokenization run."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    tokens_generated: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def tokens_per_second(self) -> float:
        """Calculate tokens generated per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.tokens_generated * 1000.0) / self.processing_time_ms


@dataclass
class TokenizationMetadata:
    """Token-level metadata for a tokenization run."""

    total_tokens: int = 0
    filtered_tokens: int = 0
    token_type_distribution: Dict[str, int] = field(default_factory=dict)

    @property
    def filter_rate(self) -> float:
        """Fraction of scanned tokens removed by filtering."""
        if self.total_tokens == 0:
            return 0.0
        return self.filtered_tokens / self.total_tokens

    def add_token_type(self, token_type: str) -> None:
        """Add a token type to the distribution."""
        self.token_type_distribution[token_type] = (
            self.token_type_distribution.get(token_type, 0) + 1
        )
