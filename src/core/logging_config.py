"""Structured logging configuration.

This module builds explicit structlog loggers with a stable JSON format.
Loggers are constructed and passed into stages rather than configured
globally, and they write to stderr so stdout carries only pipeline output.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from core.constants import DEFAULT_LOG_LEVEL

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def get_logger(
    name: str,
    level: str = DEFAULT_LOG_LEVEL,
    stream: TextIO | None = None,
) -> Any:
    """Return a structured logger instance.

    Args:
        name: Logger name, usually __name__.
        level: Minimum level name, one of debug/info/warning/error.
        stream: Output stream, stderr when omitted.

    Returns:
        A structlog bound logger emitting JSON lines.
    """
    return structlog.wrap_logger(
        structlog.PrintLogger(file=stream if stream is not None else sys.stderr),
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LOG_LEVELS[level]),
        logger_name=name,
    )
