"""Shared utilities for the streaming HTML tokenizer.

This module provides configuration objects, result types and logging helpers
used by the tokenization API and the command-line tool.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    TokenizationMetadata,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    FilterConfig,
    FilterMode,
    TokenizationConfig,
    load_config,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "TokenizationMetadata",
    "ConfigError",
    "ConfigValidationError",
    "FilterConfig",
    "FilterMode",
    "TokenizationConfig",
    "load_config",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
