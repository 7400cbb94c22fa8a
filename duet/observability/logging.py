"""Structured logging configuration using structlog.

Provides JSON logging for production and console logging for development.
Learned phrases and generated turns are logged verbatim, so long text
fields are clipped before rendering.
"""

import sys
from collections.abc import MutableMapping
from typing import Any, cast

import structlog
from structlog.types import EventDict, WrappedLogger

# Keys never clipped
STRUCTURAL_KEYS: frozenset[str] = frozenset({
    "event",
    "level",
    "timestamp",
    "logger",
    "exception",
})

LEVELS: dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


class PayloadTruncator:
    """Processor that clips long string values in log events."""

    def __init__(self, max_chars: int) -> None:
        self.max_chars = max_chars

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        if self.max_chars <= 0:
            return event_dict
        return cast(EventDict, self._clip_dict(event_dict))

    def _clip_dict(self, data: MutableMapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            if key in STRUCTURAL_KEYS:
                result[key] = value
            elif isinstance(value, str):
                result[key] = self._clip(value)
            elif isinstance(value, dict):
                result[key] = self._clip_dict(value)
            else:
                result[key] = value
        return result

    def _clip(self, value: str) -> str:
        if len(value) <= self.max_chars:
            return value
        return value[: self.max_chars] + f"...[+{len(value) - self.max_chars}]"


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    max_payload_chars: int = 200,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: "json" for production, "console" for development
        max_payload_chars: Clip string fields longer than this; 0 disables
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        PayloadTruncator(max_payload_chars),
    ]

    if format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LEVELS.get(level.upper(), 20)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
