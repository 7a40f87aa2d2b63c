"""Structured logging utilities for the streaming HTML tokenizer.

Engine modules log through plain ``logging.getLogger(__name__)`` loggers with
``component`` and ``correlation_id`` in ``extra``. Higher layers use
``CorrelationLogger`` so that context is attached automatically, and the
command-line tool installs a handler with ``configure_logging``.
"""

import logging
import sys
from typing import Any, Dict, Optional, TextIO

PACKAGE_LOGGER = "streaming_html_tokenizer"
LOG_FORMAT = (
    "%(asctime)s %(levelname)s [%(component)s] "
    "%(message)s (correlation_id=%(correlation_id)s)"
)
_FORMAT_DEFAULTS = {"component": "-", "correlation_id": None}


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for request tracking
            component: Component name for structured logging
            context: Extra fields added to every record
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]
        self.context = dict(context or {})

    def bind(self, **context: Any) -> "CorrelationLogger":
        """Return a logger that adds ``context`` to every record."""
        merged = {**self.context, **context}
        return CorrelationLogger(
            self.logger.name, self.correlation_id, self.component, merged
        )

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        combined_extra = {
            "component": self.component,
            "correlation_id": self.correlation_id,
            **self.context,
        }
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self.logger.debug(message, extra=self._get_extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self.logger.info(message, extra=self._get_extra(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message with correlation info."""
        self.logger.warning(message, extra=self._get_extra(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = False
    ) -> None:
        """Log error message with correlation info."""
        self.logger.error(message, extra=self._get_extra(extra), exc_info=exc_info)

    def exception(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log exception message with correlation info and traceback."""
        self.logger.exception(message, extra=self._get_extra(extra))


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def configure_logging(
    level: int = logging.WARNING,
    stream: Optional[TextIO] = None
) -> logging.Handler:
    """Send package log records to ``stream`` (stderr by default).

    Records logged without component or correlation information get
    placeholder values so the format never fails. Calling this again replaces
    the previously installed handler.

    Args:
        level: Minimum level for package records
        stream: Destination stream

    Returns:
        The installed handler
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if getattr(handler, "_streaming_html_tokenizer", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, defaults=_FORMAT_DEFAULTS))
    handler._streaming_html_tokenizer = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler
