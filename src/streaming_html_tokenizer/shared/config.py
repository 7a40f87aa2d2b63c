"""Configuration classes for HTML tokenization.

Configuration shapes what the tokenization API collects and reports (token
filtering, limits, diagnostics and metrics). It never changes how the input
itself is scanned.
"""

import json
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

TOKEN_TYPE_NAMES = frozenset({"DOCTYPE", "START_TAG", "END_TAG", "TEXT", "COMMENT"})
DIAGNOSTIC_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


class FilterMode(Enum):
    """Token filtering mode options."""

    INCLUDE = auto()       # Keep only matching tokens
    EXCLUDE = auto()       # Drop matching tokens


@dataclass
class FilterConfig:
    """Configuration for token filtering and selection."""

    mode: FilterMode = FilterMode.INCLUDE
    token_types: Set[str] = field(default_factory=set)
    content_patterns: List[str] = field(default_factory=list)
    case_sensitive: bool = True
    max_results: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate filter configuration."""
        self.token_types = {name.upper() for name in self.token_types}
        unknown = self.token_types - TOKEN_TYPE_NAMES
        if unknown:
            raise ValueError(f"Unknown token types: {', '.join(sorted(unknown))}")
        if self.max_results is not None and self.max_results < 0:
            raise ValueError("max_results must be >= 0 or None")

    @property
    def is_empty(self) -> bool:
        """True when the filter would pass every token unchanged."""
        return (
            not self.token_types
            and not self.content_patterns
            and self.max_results is None
        )


@dataclass
class TokenizationConfig:
    """Configuration for the tokenization API."""

    filtering: FilterConfig = field(default_factory=FilterConfig)

    correlation_id: Optional[str] = None
    enable_diagnostics: bool = True
    diagnostic_level: str = "INFO"
    enable_metrics: bool = True
    max_tokens: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate tokenization configuration."""
        self.diagnostic_level = self.diagnostic_level.upper()
        if self.diagnostic_level not in DIAGNOSTIC_LEVELS:
            raise ValueError(
                f"diagnostic_level must be one of {', '.join(DIAGNOSTIC_LEVELS)}"
            )
        if self.max_tokens is not None and self.max_tokens < 1:
            raise ValueError("max_tokens must be >= 1 or None")

    @classmethod
    def default(cls) -> "TokenizationConfig":
        """Create the default configuration: every token, full diagnostics."""
        return cls()

    @classmethod
    def text_only(cls) -> "TokenizationConfig":
        """Create configuration that keeps only text tokens."""
        return cls(filtering=FilterConfig(token_types={"TEXT"}))

    @classmethod
    def markup_only(cls) -> "TokenizationConfig":
        """Create configuration that drops text and comment tokens."""
        return cls(
            filtering=FilterConfig(
                mode=FilterMode.EXCLUDE,
                token_types={"TEXT", "COMMENT"}
            )
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary representation of the configuration
        """
        def _to_plain(obj: Any) -> Any:
            if is_dataclass(obj):
                return {f.name: _to_plain(getattr(obj, f.name)) for f in fields(obj)}
            if isinstance(obj, Enum):
                return obj.name
            if isinstance(obj, set):
                return sorted(obj)
            if isinstance(obj, (list, tuple)):
                return [_to_plain(item) for item in obj]
            return obj

        result = _to_plain(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenizationConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in configuration files do not
        pass silently.

        Args:
            data: Dictionary containing configuration data

        Returns:
            TokenizationConfig instance created from dictionary

        Raises:
            ConfigValidationError: If the data has unknown keys or invalid values
        """
        data = dict(data)
        filtering_data = data.pop("filtering", None) or {}
        _reject_unknown_keys(cls, data)
        _reject_unknown_keys(FilterConfig, filtering_data, prefix="filtering.")

        try:
            filtering_data = dict(filtering_data)
            if "mode" in filtering_data and isinstance(filtering_data["mode"], str):
                filtering_data["mode"] = FilterMode[filtering_data["mode"].upper()]
            if "token_types" in filtering_data:
                filtering_data["token_types"] = set(filtering_data["token_types"])
            return cls(filtering=FilterConfig(**filtering_data), **data)
        except KeyError as e:
            raise ConfigValidationError(
                f"Invalid filter mode: {e}",
                field_name="filtering.mode",
                suggestions=[mode.name for mode in FilterMode],
            ) from e
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "TokenizationConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)


def _reject_unknown_keys(target: type, data: Dict[str, Any], prefix: str = "") -> None:
    known = {f.name for f in fields(target)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigValidationError(
            f"Unknown configuration field: {prefix}{unknown[0]}",
            field_name=f"{prefix}{unknown[0]}",
            suggestions=sorted(known),
        )


def load_config(path: Union[str, Path]) -> TokenizationConfig:
    """Load a ``TokenizationConfig`` from a JSON file.

    Raises:
        ConfigError: If the file cannot be read
        ConfigValidationError: If its content is not a valid configuration
    """
    config_path = Path(path)
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e
    return TokenizationConfig.from_json(content)
