"""Line source stage.

This module opens each named input file and emits its content as
ordered lines without terminators. Unreadable input raises a typed
error that the runner turns into an orderly pipeline abort.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.constants import LINE_SOURCE_STAGE_NAME, SOURCE_ENCODING
from core.errors import SourceReadError
from core.logging_config import get_logger
from core.types import SourceLine
from flow.channel import Channel


class LineSource:
    """Read named files and emit their lines in file order."""

    def __init__(
        self,
        inbound: Channel[str],
        outbound: Channel[SourceLine],
        logger: Any | None = None,
        name: str = LINE_SOURCE_STAGE_NAME,
    ) -> None:
        self.name = name
        self._inbound = inbound
        self._outbound = outbound
        self._logger = logger if logger is not None else get_logger(__name__)
        self._line_count = 0
        self._source_count = 0

    @property
    def processed_count(self) -> int:
        return self._line_count

    def channels(self) -> tuple[Channel[Any], ...]:
        return (self._inbound, self._outbound)

    def run(self) -> None:
        """Emit lines for every inbound identifier, then close the line channel.

        Raises:
            SourceReadError: If a file cannot be opened or read.
        """
        for source_uri in self._inbound:
            self._emit_file_lines(source_uri)
            self._source_count += 1
        self._outbound.close()
        self._logger.info(
            "line_source_completed",
            source_count=self._source_count,
            line_count=self._line_count,
        )

    def _emit_file_lines(self, source_uri: str) -> None:
        source_path = Path(source_uri).expanduser()
        try:
            # Universal newlines: \n, \r\n and \r all end a line.
            with source_path.open("r", encoding=SOURCE_ENCODING) as handle:
                self._logger.debug("line_source_opened", source_uri=source_uri)
                for line_number, raw_line in enumerate(handle, 1):
                    self._outbound.send(
                        SourceLine(
                            source_uri=source_uri,
                            line_number=line_number,
                            text=raw_line.removesuffix("\n"),
                        )
                    )
                    self._line_count += 1
        except UnicodeDecodeError as error:
            raise SourceReadError(
                f"Failed to decode {source_path} as {SOURCE_ENCODING}: {error.reason}. "
                "Convert the file to UTF-8 and retry."
            ) from error
        except OSError as error:
            raise SourceReadError(
                f"Failed to read source at {source_path}: {error.strerror or error}. "
                "Provide an existing, readable file."
            ) from error
