"""Identifier feeder stage.

The feeder is the tiny upstream of the whole network: it injects the
configured resource identifiers into the line source and then closes
that channel so end of input propagates downstream.
"""

from __future__ import annotations

from typing import Any, Sequence

from core.constants import FEEDER_STAGE_NAME
from core.logging_config import get_logger
from flow.channel import Channel


class Feeder:
    """One-shot producer of resource identifiers."""

    def __init__(
        self,
        source_uris: Sequence[str],
        outbound: Channel[str],
        logger: Any | None = None,
        name: str = FEEDER_STAGE_NAME,
    ) -> None:
        self.name = name
        self._source_uris = tuple(source_uris)
        self._outbound = outbound
        self._logger = logger if logger is not None else get_logger(__name__)
        self._sent_count = 0

    @property
    def processed_count(self) -> int:
        return self._sent_count

    def channels(self) -> tuple[Channel[Any], ...]:
        return (self._outbound,)

    def run(self) -> None:
        """Send every identifier, then close the outbound channel."""
        for source_uri in self._source_uris:
            self._outbound.send(source_uri)
            self._sent_count += 1
        self._outbound.close()
        self._logger.debug("feeder_completed", source_count=self._sent_count)
