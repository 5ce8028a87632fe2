"""Shared typed models.

This module defines immutable data models passed between pipeline
stages and returned to callers, keeping interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from core.constants import DEFAULT_DECODE_MODE, DEFAULT_MALFORMED_POLICY

StageStatus = Literal["succeeded", "failed", "aborted"]


@dataclass(frozen=True)
class SourceLine:
    """One line of input text.

    Attributes:
        source_uri: Resource the line was read from.
        line_number: One-based position in that resource.
        text: Line content without its terminator.
    """

    source_uri: str
    line_number: int
    text: str


@dataclass(frozen=True)
class Triple:
    """One RDF statement.

    Attributes:
        subject: Subject term text.
        predicate: Predicate term text.
        object: Object term text.
    """

    subject: str
    predicate: str
    object: str


@dataclass(frozen=True)
class PipelineOptions:
    """Options for one pipeline run.

    Attributes:
        source_uri: Path of the input file.
        decode_mode: Line notation, ``turtle`` or ``whitespace``.
        malformed_policy: Handling of short whitespace records, ``fail`` or ``skip``.
    """

    source_uri: str
    decode_mode: str = DEFAULT_DECODE_MODE
    malformed_policy: str = DEFAULT_MALFORMED_POLICY


@dataclass(frozen=True)
class StageOutcome:
    """Terminal state of one stage after a run."""

    stage_name: str
    status: StageStatus
    processed_count: int
    error: BaseException | None = None


@dataclass(frozen=True)
class PipelineReport:
    """Ordered stage outcomes for one pipeline run."""

    outcomes: tuple[StageOutcome, ...]

    @property
    def failures(self) -> tuple[StageOutcome, ...]:
        """Return outcomes of stages that raised an error."""
        return tuple(outcome for outcome in self.outcomes if outcome.status == "failed")

    @property
    def succeeded(self) -> bool:
        """Return whether every stage finished cleanly."""
        return all(outcome.status == "succeeded" for outcome in self.outcomes)

    def processed_count(self, stage_name: str) -> int:
        """Return the processed item count reported by one stage."""
        for outcome in self.outcomes:
            if outcome.stage_name == stage_name:
                return outcome.processed_count
        raise KeyError(stage_name)
