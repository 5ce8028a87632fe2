"""Triple decoder stage.

This module converts inbound lines into triples with a pluggable line
parser and forwards them in line order. Parse failures are fatal,
except short whitespace records when the skip policy is selected.
"""

from __future__ import annotations

from typing import Any

from core.constants import (
    DEFAULT_MALFORMED_POLICY,
    SKIP_MALFORMED_POLICY,
    SUPPORTED_MALFORMED_POLICIES,
    TRIPLE_DECODER_STAGE_NAME,
)
from core.errors import ConfigError, MalformedRecordError, TripleParseError
from core.logging_config import get_logger
from core.types import SourceLine, Triple
from flow.channel import Channel
from transforms.triple_parsing import LineParser


class TripleDecoder:
    """Decode lines into triples and forward them downstream."""

    def __init__(
        self,
        inbound: Channel[SourceLine],
        outbound: Channel[Triple],
        parser: LineParser,
        malformed_policy: str = DEFAULT_MALFORMED_POLICY,
        logger: Any | None = None,
        name: str = TRIPLE_DECODER_STAGE_NAME,
    ) -> None:
        if malformed_policy not in SUPPORTED_MALFORMED_POLICIES:
            raise ConfigError(
                f"Unsupported malformed-record policy '{malformed_policy}'. "
                f"Use one of: {', '.join(SUPPORTED_MALFORMED_POLICIES)}."
            )
        self.name = name
        self._inbound = inbound
        self._outbound = outbound
        self._parser = parser
        self._malformed_policy = malformed_policy
        self._logger = logger if logger is not None else get_logger(__name__)
        self._line_count = 0
        self._triple_count = 0
        self._skipped_count = 0

    @property
    def processed_count(self) -> int:
        return self._triple_count

    @property
    def skipped_count(self) -> int:
        return self._skipped_count

    def channels(self) -> tuple[Channel[Any], ...]:
        return (self._inbound, self._outbound)

    def run(self) -> None:
        """Decode every inbound line, then close the triple channel.

        Raises:
            TripleParseError: If a line cannot be decoded.
        """
        for line in self._inbound:
            self._line_count += 1
            for triple in self._decode(line):
                self._outbound.send(triple)
                self._triple_count += 1
        self._outbound.close()
        self._logger.info(
            "triple_decoder_completed",
            line_count=self._line_count,
            triple_count=self._triple_count,
            skipped_count=self._skipped_count,
        )

    def _decode(self, line: SourceLine) -> list[Triple]:
        try:
            return self._parser(line)
        except MalformedRecordError as error:
            if self._malformed_policy != SKIP_MALFORMED_POLICY:
                self._log_parse_failure(error)
                raise
            self._skipped_count += 1
            self._logger.warning(
                "malformed_record_skipped",
                source_uri=error.source_uri,
                line_number=error.line_number,
                line=error.line,
            )
            return []
        except TripleParseError as error:
            self._log_parse_failure(error)
            raise

    def _log_parse_failure(self, error: TripleParseError) -> None:
        self._logger.error(
            "triple_parse_failed",
            source_uri=error.source_uri,
            line_number=error.line_number,
            line=error.line,
            error=str(error),
        )
