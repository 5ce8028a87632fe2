"""triplestream exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline concern raises a specific error type for debuggability.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.types import PipelineReport


class TripleStreamError(Exception):
    """Base exception for all triplestream failures."""


class ConfigError(TripleStreamError):
    """Raised for invalid runtime configuration."""


class RunFileError(ConfigError):
    """Raised for unreadable or schema-invalid YAML run files."""


class PipelineConfigError(ConfigError):
    """Raised when stages are registered or run in an invalid way."""


class ChannelError(TripleStreamError):
    """Base exception for channel protocol violations."""


class ChannelClosedError(ChannelError):
    """Raised when sending on, or re-closing, a closed channel."""


class ChannelAbortedError(ChannelError):
    """Raised in blocked stages when the runner tears a channel down."""


class SourceReadError(TripleStreamError):
    """Raised when an input resource cannot be opened or read."""


class TripleParseError(TripleStreamError):
    """Raised when a line cannot be decoded into triples."""

    def __init__(self, message: str, source_uri: str, line_number: int, line: str) -> None:
        super().__init__(f"{source_uri}:{line_number}: {message}. Offending input: {line!r}")
        self.source_uri = source_uri
        self.line_number = line_number
        self.line = line


class MalformedRecordError(TripleParseError):
    """Raised for whitespace records with fewer than three fields."""


class PipelineRunError(TripleStreamError):
    """Raised after an orderly shutdown when any stage failed."""

    def __init__(self, report: "PipelineReport") -> None:
        failure_rows = "; ".join(
            f"stage '{outcome.stage_name}' failed: {outcome.error}" for outcome in report.failures
        )
        super().__init__(f"Pipeline run failed: {failure_rows}")
        self.report = report
