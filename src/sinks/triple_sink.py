"""Triple sink stage.

This module renders each triple as a human-readable block on a text
stream, one record at a time in arrival order.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from core.constants import TRIPLE_SINK_STAGE_NAME
from core.logging_config import get_logger
from core.types import Triple
from flow.channel import Channel


def render_triple(triple: Triple) -> str:
    """Render one triple as an ``S:``/``P:``/``O:`` block and a blank line."""
    return f"S: {triple.subject}\nP: {triple.predicate}\nO: {triple.object}\n\n"


class TripleSink:
    """Write inbound triples to an output stream."""

    def __init__(
        self,
        inbound: Channel[Triple],
        output: TextIO | None = None,
        logger: Any | None = None,
        name: str = TRIPLE_SINK_STAGE_NAME,
    ) -> None:
        self.name = name
        self._inbound = inbound
        self._output = output if output is not None else sys.stdout
        self._logger = logger if logger is not None else get_logger(__name__)
        self._triple_count = 0

    @property
    def processed_count(self) -> int:
        return self._triple_count

    def channels(self) -> tuple[Channel[Any], ...]:
        return (self._inbound,)

    def run(self) -> None:
        """Render triples until the inbound channel closes."""
        for triple in self._inbound:
            self._output.write(render_triple(triple))
            self._triple_count += 1
        self._output.flush()
        self._logger.info("triple_sink_completed", triple_count=self._triple_count)
