"""Shared utilities for htmlencode.

This module provides the configuration object, run metrics and logging helpers
used by the codec, the API and the command-line tool.
"""

from .config import (
    DEFAULT_SPECIAL_CHARS,
    ConfigError,
    ConfigValidationError,
    TranscodeConfig,
    coerce_special_chars,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import TranscodeMetrics

__all__ = [
    "DEFAULT_SPECIAL_CHARS",
    "ConfigError",
    "ConfigValidationError",
    "TranscodeConfig",
    "coerce_special_chars",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "TranscodeMetrics",
]
