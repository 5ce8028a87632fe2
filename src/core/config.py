"""Runtime configuration model for triplestream.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import DEFAULT_CHANNEL_CAPACITY, DEFAULT_LOG_LEVEL, SUPPORTED_LOG_LEVELS
from core.errors import ConfigError


@dataclass(frozen=True)
class TripleStreamConfig:
    """Validated runtime configuration.

    Attributes:
        channel_capacity: Fixed buffer size of every pipeline channel.
        log_level: Minimum level of emitted log events.
    """

    channel_capacity: int
    log_level: str

    @classmethod
    def from_env(cls) -> "TripleStreamConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ConfigError: If environment values are invalid.
        """
        capacity_value = os.getenv(
            "TRIPLESTREAM_CHANNEL_CAPACITY", str(DEFAULT_CHANNEL_CAPACITY)
        )
        log_level_value = os.getenv("TRIPLESTREAM_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        return cls(
            channel_capacity=parse_channel_capacity(capacity_value),
            log_level=parse_log_level(log_level_value),
        )


def parse_channel_capacity(raw_value: str | int) -> int:
    """Parse and validate a channel capacity value.

    Args:
        raw_value: Raw string from environment or an integer override.

    Returns:
        Positive integer capacity.

    Raises:
        ConfigError: If value is not a positive integer.
    """
    try:
        capacity = int(raw_value)
    except ValueError as error:
        raise ConfigError(
            "Invalid TRIPLESTREAM_CHANNEL_CAPACITY value: "
            f"expected integer, got '{raw_value}'. "
            "Set TRIPLESTREAM_CHANNEL_CAPACITY to a positive number."
        ) from error
    if capacity < 1:
        raise ConfigError(
            f"Invalid channel capacity {capacity}: channels need room for at least one value."
        )
    return capacity


def parse_log_level(raw_value: str) -> str:
    """Normalize and validate a log level name."""
    log_level = raw_value.strip().lower()
    if log_level not in SUPPORTED_LOG_LEVELS:
        raise ConfigError(
            f"Invalid log level '{raw_value}'. Use one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return log_level
